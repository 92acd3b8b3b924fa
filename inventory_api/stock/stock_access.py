from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from inventory_api.db.models import Stock
from inventory_api.db.sessions import build_sessionmaker
from inventory_api.core.logging_utils import get_logger

logger = get_logger(__name__)


class StoreError(Exception):
    """Any storage-layer failure, carrying the driver's message."""


def _upsert_statement(dialect_name: str, name: str, amount: int):
    """
    Single-statement insert-or-increment for the given SQL dialect.

    The addition happens inside the database, so concurrent upserts of the
    same name never lose an increment.
    """
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql_insert(Stock).values(name=name, amount=amount)
        return stmt.on_duplicate_key_update(
            amount=Stock.amount + stmt.inserted.amount
        )

    if dialect_name == "sqlite":
        stmt = sqlite_insert(Stock).values(name=name, amount=amount)
        return stmt.on_conflict_do_update(
            index_elements=[Stock.name],
            set_={"amount": Stock.amount + stmt.excluded.amount},
        )

    raise StoreError(f"upsert is not supported for dialect {dialect_name!r}")


class StockStore:
    """
    Persistence for the `stocks` table.

    One instance is built at startup and shared by every request; it owns
    the engine and disposes of it on close().
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessions = build_sessionmaker(engine)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreError("store already closed")

    def list_all(self) -> list[Stock]:
        """Return every stock row, in whatever order the database yields."""
        self._ensure_open()
        try:
            with self._sessions() as db:
                stocks = list(db.scalars(select(Stock)).all())
        except SQLAlchemyError as e:
            logger.exception("Error listing stocks: %s", e)
            raise StoreError(str(e)) from e

        logger.debug("Fetched %d stocks", len(stocks))
        return stocks

    def find_by_name(self, name: str) -> Optional[Stock]:
        """Return the stock called `name`, or None when there is no such row."""
        self._ensure_open()
        try:
            with self._sessions() as db:
                stock = db.get(Stock, name)
        except SQLAlchemyError as e:
            logger.exception("Error fetching stock name=%s: %s", name, e)
            raise StoreError(str(e)) from e

        logger.debug("Lookup name=%s found=%s", name, stock is not None)
        return stock

    def upsert(self, name: str, amount: int) -> None:
        """Insert `name` with `amount`, or add `amount` to the existing row."""
        self._ensure_open()
        try:
            with self._sessions.begin() as db:
                stmt = _upsert_statement(db.get_bind().dialect.name, name, amount)
                db.execute(stmt)
        except SQLAlchemyError as e:
            logger.exception("Error upserting stock name=%s amount=%s: %s", name, amount, e)
            raise StoreError(str(e)) from e

        logger.info("Upserted stock name=%s amount=+%s", name, amount)

    def close(self) -> None:
        self._ensure_open()
        self._closed = True
        self.engine.dispose()
        logger.info("Stock store closed")
