import logging

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from inventory_api.db.init_db import init_db
from inventory_api.db.sessions import build_engine, wait_for_database


def test_wait_for_database_succeeds(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'ok.db'}")
    wait_for_database(engine, retries=1, delay=0)
    engine.dispose()


def test_wait_for_database_gives_up(tmp_path, monkeypatch):
    sleeps = []
    monkeypatch.setattr("inventory_api.db.sessions.time.sleep", sleeps.append)
    engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}")

    with pytest.raises(OperationalError):
        wait_for_database(engine, retries=3, delay=0.5)

    assert sleeps == [0.5, 0.5]


def test_init_db_is_idempotent(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'init.db'}")
    init_db(engine)
    init_db(engine)

    columns = {c["name"] for c in inspect(engine).get_columns("stocks")}
    assert columns == {"name", "amount"}
    engine.dispose()


def test_wait_for_database_zero_retries_tries_once(tmp_path, monkeypatch, caplog):
    sleeps = []
    monkeypatch.setattr("inventory_api.db.sessions.time.sleep", sleeps.append)
    engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}")

    with caplog.at_level(logging.WARNING, logger="inventory_api.db.sessions"):
        with pytest.raises(OperationalError):
            wait_for_database(engine, retries=0, delay=0.5)

    assert sleeps == []
    assert "(attempt 1/1)" in caplog.text
