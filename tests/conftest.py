"""Pytest fixtures for the marketplace API tests."""

import os
import tempfile
from pathlib import Path

import pytest

# Engine, limiter and observability read their settings at import time
_DB_PATH = Path(tempfile.mkdtemp(prefix="bazaar-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["TRACING_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from main import app  # noqa: E402
from shared.config.database import Base  # noqa: E402

SELLER_PASSWORD = "Secret123"


# Plain sqlite3 engine on the same file, so resetting needs no event loop
_sync_engine = create_engine(f"sqlite:///{_DB_PATH}")


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(_sync_engine)
    Base.metadata.create_all(_sync_engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup_seller(client, email="seller@example.com", name="Ayesha Crafts"):
    response = client.post(
        "/api/seller/signup",
        json={"name": name, "email": email, "password": SELLER_PASSWORD, "phone": "+923001234567"},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body["seller"], body["token"]


def create_store(client, token, name="Lahore Looms"):
    response = client.post(
        "/api/stores",
        json={
            "name": name,
            "category": "Traditional Textiles",
            "description": "Hand-woven textiles from Lahore",
        },
        headers=auth_header(token),
    )
    assert response.status_code == 201, response.text
    return response.json()["store"]


def create_product(client, token, store_id, name="Khaddar Shawl", price=100.0):
    response = client.post(
        "/api/products",
        json={
            "name": name,
            "description": "Warm hand-loomed khaddar shawl",
            "price": price,
            "category": "Clothing",
            "quantity": 10,
            "store_id": store_id,
        },
        headers=auth_header(token),
    )
    assert response.status_code == 201, response.text
    return response.json()["product"]


def shipping_address() -> dict:
    return {
        "fullName": "Bilal Ahmed",
        "addressLine": "House 12, Street 4, Gulberg",
        "city": "Lahore",
        "postalCode": "54000",
        "phone": "0300-1234567",
    }


@pytest.fixture
def seller(client):
    """A registered seller as (profile, token)."""
    return signup_seller(client)


@pytest.fixture
def catalog(client, seller):
    """One store owned by `seller` holding one product priced 100."""
    _, token = seller
    store = create_store(client, token)
    product = create_product(client, token, store["id"])
    return {"store": store, "product": product, "token": token}
