"""Tests for orders API endpoints."""

from collections.abc import Generator
from typing import Any

import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from orderflow import models
from orderflow.application.ordering.protocols import PaymentReceipt
from orderflow.core import container
from orderflow.domain.common.value_objects import Money
from orderflow.infrastructure.ordering.services import SandboxPaymentGateway


class RecordingPaymentGateway:
    """Payment gateway double that remembers what it was asked to do."""

    def __init__(self) -> None:
        self.charges: list[tuple[Money, str]] = []
        self.refunds: list[tuple[str, Money]] = []

    def charge(self, amount: Money, reference: str) -> PaymentReceipt:
        self.charges.append((amount, reference))
        return PaymentReceipt(transaction_id=f"rec_{len(self.charges)}", amount=amount)

    def refund(self, transaction_id: str, amount: Money) -> None:
        self.refunds.append((transaction_id, amount))


class BrokenShippingCarrier:
    def create_shipment(self, reference: str, address: str) -> str:
        raise RuntimeError("carrier exploded")


@pytest.fixture
def recording_gateway() -> Generator[RecordingPaymentGateway, None, None]:
    gateway = RecordingPaymentGateway()
    container.payment_gateway.override(providers.Object(gateway))
    try:
        yield gateway
    finally:
        container.payment_gateway.reset_override()


class TestPlaceOrder:
    """Test suite for POST /orders endpoint."""

    def test_place_order_success(
        self, client: TestClient, db_session: Session, order_payload: dict[str, Any]
    ) -> None:
        """Test placing an order returns the pending order with its total."""
        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["id"] > 0
        assert data["status"] == "pending"
        assert data["currency"] == "EUR"
        assert data["total_cents"] == 2 * 1250 + 300
        assert [line["sku"] for line in data["lines"]] == ["BOOK-001", "PEN-010"]
        assert data["lines"][0]["subtotal_cents"] == 2500
        assert data["payment_reference"] is None

        db_order = db_session.get(models.Order, data["id"])
        assert db_order is not None
        assert db_order.status == "pending"
        assert len(db_order.lines) == 2

    def test_place_order_normalizes_email(
        self, client: TestClient, order_payload: dict[str, Any]
    ) -> None:
        order_payload["customer_email"] = "  Ada@Example.COM "
        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["customer_email"] == "ada@example.com"

    def test_place_order_without_lines(
        self, client: TestClient, order_payload: dict[str, Any]
    ) -> None:
        """Test request validation rejects an order with no lines."""
        order_payload["lines"] = []
        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_place_order_invalid_email(
        self, client: TestClient, order_payload: dict[str, Any]
    ) -> None:
        """Test the domain rejects an email without an @."""
        order_payload["customer_email"] = "not-an-email"
        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Customer email is not valid"
        assert response.json()["context"]["field"] == "customer_email"

    def test_place_order_invalid_currency(
        self, client: TestClient, order_payload: dict[str, Any]
    ) -> None:
        order_payload["currency"] = "E1R"
        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestGetOrder:
    """Test suite for GET /orders/:id endpoint."""

    def test_get_order_success(self, client: TestClient, pending_order: dict[str, Any]) -> None:
        response = client.get(f"/api/v1/orders/{pending_order['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == pending_order["id"]
        assert response.json()["total_cents"] == pending_order["total_cents"]
        assert response.json()["placed_at"].endswith("Z")

    def test_get_order_not_found(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Order with id 99999 not found"

    def test_get_order_negative_id(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders/-1")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "OrderId must be non-negative"
        assert response.json()["context"] == {"field": "id", "value": -1}


class TestListOrders:
    """Test suite for GET /orders endpoint."""

    def test_list_orders_filters_by_status(
        self,
        client: TestClient,
        order_payload: dict[str, Any],
        paid_order: dict[str, Any],
    ) -> None:
        client.post("/api/v1/orders", json=order_payload)

        response = client.get("/api/v1/orders", params={"status": "paid"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert [order["id"] for order in data["orders"]] == [paid_order["id"]]

    def test_list_orders_paginates(
        self, client: TestClient, order_payload: dict[str, Any]
    ) -> None:
        for _ in range(3):
            client.post("/api/v1/orders", json=order_payload)

        response = client.get("/api/v1/orders", params={"page": 2, "page_size": 2})

        data = response.json()
        assert data["total"] == 3
        assert data["total_pages"] == 2
        assert data["page"] == 2
        assert len(data["orders"]) == 1
        assert data["has_next"] is False
        assert data["has_previous"] is True

    def test_list_orders_rejects_unknown_status(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders", params={"status": "lost"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestPayOrder:
    """Test suite for POST /orders/:id/payment endpoint."""

    def test_pay_order_success(self, client: TestClient, pending_order: dict[str, Any]) -> None:
        response = client.post(
            f"/api/v1/orders/{pending_order['id']}/payment",
            json={"amount_cents": pending_order["total_cents"]},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "paid"
        assert data["payment_reference"].startswith("txn_")
        assert data["paid_at"] is not None

    def test_pay_order_charges_total_with_order_reference(
        self,
        client: TestClient,
        pending_order: dict[str, Any],
        recording_gateway: RecordingPaymentGateway,
    ) -> None:
        client.post(
            f"/api/v1/orders/{pending_order['id']}/payment",
            json={"amount_cents": pending_order["total_cents"]},
        )

        assert recording_gateway.charges == [
            (Money(pending_order["total_cents"], "EUR"), f"order-{pending_order['id']}")
        ]

    def test_pay_order_amount_mismatch(
        self,
        client: TestClient,
        pending_order: dict[str, Any],
        recording_gateway: RecordingPaymentGateway,
    ) -> None:
        """Test a wrong amount fails before anything is charged."""
        response = client.post(
            f"/api/v1/orders/{pending_order['id']}/payment",
            json={"amount_cents": pending_order["total_cents"] - 1},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert recording_gateway.charges == []
        order = client.get(f"/api/v1/orders/{pending_order['id']}").json()
        assert order["status"] == "pending"

    def test_pay_order_twice(
        self,
        client: TestClient,
        paid_order: dict[str, Any],
        recording_gateway: RecordingPaymentGateway,
    ) -> None:
        """Test paying a paid order is a conflict and charges nothing."""
        response = client.post(
            f"/api/v1/orders/{paid_order['id']}/payment",
            json={"amount_cents": paid_order["total_cents"]},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "cannot move from 'paid' to 'paid'" in response.json()["detail"]
        assert recording_gateway.charges == []

    def test_pay_order_not_found(self, client: TestClient) -> None:
        response = client.post("/api/v1/orders/99999/payment", json={"amount_cents": 100})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_pay_order_declined(self, client: TestClient, pending_order: dict[str, Any]) -> None:
        container.payment_gateway.override(
            providers.Object(SandboxPaymentGateway(decline_above_cents=100))
        )
        try:
            response = client.post(
                f"/api/v1/orders/{pending_order['id']}/payment",
                json={"amount_cents": pending_order["total_cents"]},
            )
        finally:
            container.payment_gateway.reset_override()

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
        assert "declined" in response.json()["detail"]
        order = client.get(f"/api/v1/orders/{pending_order['id']}").json()
        assert order["status"] == "pending"


class TestShipOrder:
    """Test suite for POST /orders/:id/shipment endpoint."""

    def test_ship_paid_order(self, client: TestClient, paid_order: dict[str, Any]) -> None:
        response = client.post(f"/api/v1/orders/{paid_order['id']}/shipment")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "shipped"
        assert data["tracking_number"].startswith("SBX-")
        assert data["payment_reference"] == paid_order["payment_reference"]

    def test_ship_pending_order(self, client: TestClient, pending_order: dict[str, Any]) -> None:
        """Test an unpaid order cannot be shipped."""
        response = client.post(f"/api/v1/orders/{pending_order['id']}/shipment")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["context"]["rule"] == "order_status_transition"

    def test_ship_order_unexpected_error(
        self, client: TestClient, paid_order: dict[str, Any]
    ) -> None:
        """Test an unexpected failure becomes a generic 500 and leaves the order paid."""
        container.shipping_carrier.override(providers.Object(BrokenShippingCarrier()))
        try:
            response = client.post(f"/api/v1/orders/{paid_order['id']}/shipment")
        finally:
            container.shipping_carrier.reset_override()

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == (
            "An unexpected error occurred. Please try again later."
        )
        order = client.get(f"/api/v1/orders/{paid_order['id']}").json()
        assert order["status"] == "paid"


class TestCancelOrder:
    """Test suite for POST /orders/:id/cancellation endpoint."""

    def test_cancel_pending_order(
        self,
        client: TestClient,
        pending_order: dict[str, Any],
        recording_gateway: RecordingPaymentGateway,
    ) -> None:
        response = client.post(
            f"/api/v1/orders/{pending_order['id']}/cancellation",
            json={"reason": "changed my mind"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "cancelled"
        assert data["cancellation_reason"] == "changed my mind"
        assert recording_gateway.refunds == []

    def test_cancel_paid_order_refunds(
        self,
        client: TestClient,
        pending_order: dict[str, Any],
        recording_gateway: RecordingPaymentGateway,
    ) -> None:
        client.post(
            f"/api/v1/orders/{pending_order['id']}/payment",
            json={"amount_cents": pending_order["total_cents"]},
        )

        response = client.post(
            f"/api/v1/orders/{pending_order['id']}/cancellation",
            json={"reason": "out of stock"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert recording_gateway.refunds == [
            ("rec_1", Money(pending_order["total_cents"], "EUR"))
        ]

    def test_cancel_shipped_order(self, client: TestClient, paid_order: dict[str, Any]) -> None:
        client.post(f"/api/v1/orders/{paid_order['id']}/shipment")

        response = client.post(
            f"/api/v1/orders/{paid_order['id']}/cancellation",
            json={"reason": "too late"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_cancel_requires_reason(
        self, client: TestClient, pending_order: dict[str, Any]
    ) -> None:
        response = client.post(
            f"/api/v1/orders/{pending_order['id']}/cancellation",
            json={"reason": ""},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"
