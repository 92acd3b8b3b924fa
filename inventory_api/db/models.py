from sqlalchemy import Column, Integer, String

from inventory_api.db.sessions import Base


class Stock(Base):
    __tablename__ = "stocks"

    name = Column(String(255), primary_key=True)
    amount = Column(Integer, nullable=False, default=0, server_default="0")

    def __repr__(self) -> str:
        return f"Stock(name={self.name!r}, amount={self.amount!r})"
