"""Pytest configuration and fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["PAYMENT_PROVIDER"] = "sandbox"

from collections.abc import Generator  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from orderflow import models  # noqa: E402
from orderflow.database import Base, get_db  # noqa: E402
from orderflow.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def order_payload() -> dict[str, Any]:
    return {
        "customer_email": "ada@example.com",
        "shipping_address": "12 Analytical Row, London",
        "currency": "EUR",
        "lines": [
            {"sku": "BOOK-001", "quantity": 2, "unit_price_cents": 1250},
            {"sku": "PEN-010", "quantity": 1, "unit_price_cents": 300},
        ],
    }


@pytest.fixture
def pending_order(client: TestClient, order_payload: dict[str, Any]) -> dict[str, Any]:
    """An order placed through the API."""
    response = client.post("/api/v1/orders", json=order_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def paid_order(client: TestClient, pending_order: dict[str, Any]) -> dict[str, Any]:
    """An order placed and paid through the API."""
    response = client.post(
        f"/api/v1/orders/{pending_order['id']}/payment",
        json={"amount_cents": pending_order["total_cents"]},
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def stored_order(db_session: Session) -> models.Order:
    """A pending order inserted directly through the ORM."""
    order = models.Order(
        customer_email="grace@example.com",
        shipping_address="1 Harbour Lane",
        status="pending",
        placed_at=datetime.now(UTC),
        lines=[
            models.OrderLine(
                position=0, sku="MUG-1", quantity=3, unit_price_cents=500, currency="USD"
            )
        ],
    )
    db_session.add(order)
    db_session.commit()
    db_session.refresh(order)
    return order
