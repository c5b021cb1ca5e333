"""Shared fixtures: a fresh SQLite registry per test."""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from core.config import NameserverConfig
from core.registration import RegistrationService
from core.registry_db import SQLiteRegistryStore
from server import create_app


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "nameserver.db"


@pytest.fixture
def store(db_path):
    store = SQLiteRegistryStore(db_path)
    store.init_schema()
    return store


@pytest.fixture
def service(store):
    return RegistrationService(store)


@pytest.fixture
def client(db_path):
    app = create_app(NameserverConfig(connect_string=f"sqlite://{db_path}"))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def delete_position(db_path):
    """Remove a row behind the store's back, to simulate a corrupt registry."""
    def _delete(position):
        conn = sqlite3.connect(str(db_path))
        conn.execute("DELETE FROM server WHERE id = ?", (position,))
        conn.commit()
        conn.close()
    return _delete


@pytest.fixture
def legacy_table(db_path):
    """Three-column server table, as written before parent_id and the url index."""
    def _create(urls):
        conn = sqlite3.connect(str(db_path))
        conn.execute("""CREATE TABLE server (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            url TEXT NOT NULL,
            service_id TEXT NOT NULL
        )""")
        conn.executemany(
            "INSERT INTO server (url, service_id) VALUES (?, ?)",
            [(url, f"svc-{url}") for url in urls],
        )
        conn.commit()
        conn.close()
    return _create
