# inventory_api/db/init_db.py

from sqlalchemy.engine import Engine

from inventory_api.db.sessions import Base
# Import all models so SQLAlchemy knows about them when creating tables
from inventory_api.db.models import Stock  # noqa: F401
from inventory_api.core.logging_utils import get_logger

logger = get_logger(__name__)


def init_db(engine: Engine) -> None:
    """Create all tables (if not exist)."""
    logger.info("Creating tables (if not exist)...")
    Base.metadata.create_all(bind=engine)
