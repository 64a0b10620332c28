# tests/conftest.py
import copy

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app import database
from app.config import settings
from app.database import Base, make_engine
from app.main import app
from app.storage import InMemoryScoreStore, SqlScoreStore, get_store
from app.validation import validate_receipt

TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}

@pytest.fixture
def target_payload():
    return copy.deepcopy(TARGET_RECEIPT)

@pytest.fixture
def corner_market_payload():
    return copy.deepcopy(CORNER_MARKET_RECEIPT)

@pytest.fixture
def make_receipt():
    """Build a validated Receipt from a small neutral base plus overrides."""
    def _make(**overrides):
        payload = {
            "retailer": "-",
            "purchaseDate": "2022-01-02",
            "purchaseTime": "09:00",
            "items": [{"shortDescription": "ab", "price": "1.00"}],
            "total": "10.33",
        }
        payload.update(overrides)
        result = validate_receipt(payload)
        assert result.ok, result.errors
        return result.receipt
    return _make

@pytest.fixture
def store():
    return InMemoryScoreStore()

@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def sql_store(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'receipts.db'}")
    Base.metadata.create_all(bind=engine)
    yield SqlScoreStore(sessionmaker(bind=engine))
    engine.dispose()

@pytest.fixture
def sql_settings(tmp_path, monkeypatch):
    """Point settings at a throwaway SQLite file and select the sql backend."""
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setattr(settings, "STORE_BACKEND", "sql")
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database, "_SessionLocal", None)
    get_store.cache_clear()
    yield settings
    if database._engine is not None:
        database._engine.dispose()
    get_store.cache_clear()
