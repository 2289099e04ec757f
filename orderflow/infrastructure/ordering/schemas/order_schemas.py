"""Pydantic schemas for Order API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from orderflow.domain.ordering.entities import Order, OrderStatus


class OrderLineRequest(BaseModel):
    """Schema for one line of a new order."""

    sku: str = Field(..., min_length=1, max_length=100, description="Stock keeping unit")
    quantity: int = Field(..., ge=1, description="Number of units")
    unit_price_cents: int = Field(..., ge=0, description="Price of one unit in cents")


class OrderCreateRequest(BaseModel):
    """Schema for placing an order."""

    customer_email: str = Field(..., min_length=3, max_length=320, description="Customer email")
    shipping_address: str = Field(..., min_length=1, description="Where to ship the order")
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 currency code")
    lines: list[OrderLineRequest] = Field(..., min_length=1, description="Order lines")


class OrderPaymentRequest(BaseModel):
    """Schema for paying an order."""

    amount_cents: int = Field(..., ge=0, description="Amount the customer confirmed, in cents")


class OrderCancelRequest(BaseModel):
    """Schema for cancelling an order."""

    reason: str = Field(..., min_length=1, description="Why the order is cancelled")


class OrderLineResponse(BaseModel):
    """Schema for an order line in responses."""

    sku: str
    quantity: int
    unit_price_cents: int
    subtotal_cents: int


class OrderResponse(BaseModel):
    """Schema for Order response."""

    id: int
    customer_email: str
    shipping_address: str
    status: OrderStatus
    currency: str
    total_cents: int
    lines: list[OrderLineResponse]
    payment_reference: str | None
    tracking_number: str | None
    cancellation_reason: str | None
    placed_at: datetime
    paid_at: datetime | None
    shipped_at: datetime | None
    cancelled_at: datetime | None

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponse":
        """Build the response from a domain entity."""
        return cls(
            id=order.id.value,
            customer_email=order.customer_email,
            shipping_address=order.shipping_address,
            status=order.status,
            currency=order.currency,
            total_cents=order.total.amount_cents,
            lines=[
                OrderLineResponse(
                    sku=line.sku,
                    quantity=line.quantity,
                    unit_price_cents=line.unit_price.amount_cents,
                    subtotal_cents=line.subtotal.amount_cents,
                )
                for line in order.lines
            ],
            payment_reference=order.payment_reference,
            tracking_number=order.tracking_number,
            cancellation_reason=order.cancellation_reason,
            placed_at=order.placed_at,
            paid_at=order.paid_at,
            shipped_at=order.shipped_at,
            cancelled_at=order.cancelled_at,
        )


class OrderListResponse(BaseModel):
    """Schema for a page of orders."""

    orders: list[OrderResponse] = Field(..., description="Orders on this page")
    total: int = Field(..., description="Total matching orders")
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool
