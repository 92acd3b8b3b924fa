from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import Optional


class Settings(BaseSettings):
    mysql_user: str = "root"
    mysql_password: str = "root"
    db_host: str = "localhost"
    db_port: int = 3306
    mysql_database: str = "stock_db"

    # full SQLAlchemy URL, wins over the MySQL parts above
    database_url: Optional[str] = None

    app_host: str = "localhost"
    app_port: int = 8080

    db_connect_retries: int = 3
    db_connect_retry_delay: float = 1.0

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        url = URL.create(
            "mysql+pymysql",
            username=self.mysql_user,
            password=self.mysql_password,
            host=self.db_host,
            port=self.db_port,
            database=self.mysql_database,
        )
        return url.render_as_string(hide_password=False)


settings = Settings()
