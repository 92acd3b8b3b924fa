import time

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, declarative_base

from inventory_api.core.logging_utils import get_logger

# Base class for all your models
Base = declarative_base()

logger = get_logger(__name__)


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if make_url(database_url).get_backend_name() == "sqlite":
        # pooled connections are handed to whichever worker thread asks
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def build_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def wait_for_database(engine: Engine, retries: int = 3, delay: float = 1.0) -> None:
    """
    Ping the database until it answers, at most `retries` times.

    Only meant for startup: the last OperationalError is raised when every
    attempt fails.
    """
    target = engine.url.render_as_string(hide_password=True)
    attempts = max(retries, 1)
    last_error = None
    for attempt in range(1, attempts + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Connected to database %s", target)
            return
        except OperationalError as e:
            last_error = e
            logger.warning(
                "Failed to connect to database %s (attempt %d/%d): %s",
                target,
                attempt,
                attempts,
                e,
            )
            if attempt < attempts:
                time.sleep(delay)

    raise last_error
