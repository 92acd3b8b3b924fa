import pytest
from fastapi.testclient import TestClient

from inventory_api.db.init_db import init_db
from inventory_api.db.sessions import build_engine
from inventory_api.stock.stock_access import StockStore
from main import create_app


@pytest.fixture
def store(tmp_path):
    """A StockStore on a fresh SQLite file with the tables created."""
    engine = build_engine(f"sqlite:///{tmp_path / 'stocks.db'}")
    init_db(engine)
    store = StockStore(engine)
    yield store
    if not store.closed:
        store.close()


@pytest.fixture
def client(store):
    # entering the client runs the app lifespan, which closes the store on exit
    with TestClient(create_app(store)) as client:
        yield client
