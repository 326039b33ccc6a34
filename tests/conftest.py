# tests/conftest.py

"""
Shared fixtures for the Product API tests.
Each test gets its own SQLite database file, so tests never share rows.
"""
import logging
import os

# Configure before product_api is imported so the default app never points at PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite:///./product_api_test.db")
os.environ.setdefault("DB_CONNECT_RETRY_DELAY", "0")

import pytest
from fastapi.testclient import TestClient

from product_api.db import Database
from product_api.main import create_app

# Suppress noisy logs from SQLAlchemy during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@pytest.fixture
def database(tmp_path):
    """A store handle backed by a fresh SQLite file."""
    db = Database(f"sqlite:///{tmp_path / 'products.db'}", retries=1, retry_delay=0)
    yield db
    db.close()


@pytest.fixture
def client(database):
    """
    Provides a TestClient for the app built around `database`.
    Entering the client runs the lifespan, which opens and later closes the store.
    """
    with TestClient(create_app(database)) as test_client:
        yield test_client


@pytest.fixture
def product(client):
    """A product created through the API."""
    response = client.post(
        "/api/products", json={"name": "Monitor curvo - Testing", "price": 300}
    )
    assert response.status_code == 201
    return response.json()["data"]
