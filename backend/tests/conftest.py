"""
Global pytest configuration and fixtures.
"""
import os
from datetime import datetime

# Configure environment before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.models.trade import Trade
from main import app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client, email="trader@example.com", password="secret123"):
    client.post("/api/auth/register", json={"email": email, "password": password})
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)


@pytest.fixture
def account(client, auth_headers):
    r = client.post(
        "/api/accounts",
        json={"name": "Main", "type": "Live", "initial_balance": 1000},
        headers=auth_headers,
    )
    return r.json()


@pytest.fixture
def trade_payload():
    def build(**overrides):
        payload = {
            "market": "Forex",
            "symbol": "EURUSD",
            "type": "Long",
            "status": "Win",
            "entry_price": 1.10,
            "exit_price": 1.11,
            "size": 1.0,
            "profit_loss": 100.0,
            "entry_date": "2024-03-04T09:00:00",
            "exit_date": "2024-03-04T15:00:00",
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
def make_trade():
    """Build unsaved Trade rows for the pure aggregation functions."""
    counter = {"n": 0}

    def build(profit_loss=0.0, status="Win", exit_date=None, **kw):
        counter["n"] += 1
        fields = dict(
            id=counter["n"],
            account_id=1,
            user_id=1,
            market="Forex",
            symbol="EURUSD",
            type="Long",
            status=status,
            entry_price=1.0,
            exit_price=1.0,
            size=1.0,
            risk_reward=None,
            profit_loss=profit_loss,
            entry_date=exit_date or datetime(2024, 1, 15, 9, 0),
            exit_date=exit_date or datetime(2024, 1, 15, 16, 0),
            notes=None,
        )
        fields.update(kw)
        return Trade(**fields)
    return build
