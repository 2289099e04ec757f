"""Order aggregate: a customer's purchase from placement to shipping."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from orderflow.domain.common.aggregate_root import AggregateRoot
from orderflow.domain.common.exceptions import InvariantViolationError, ValidationError
from orderflow.domain.common.value_object import ValueObject
from orderflow.domain.common.value_objects import Money, OrderId
from orderflow.domain.ordering.events import OrderCancelled, OrderPaid, OrderShipped
from orderflow.domain.ordering.exceptions import InvalidOrderTransitionError


class OrderStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLine(ValueObject):
    """A quantity of one SKU at a fixed unit price."""

    sku: str
    quantity: int
    unit_price: Money

    def __post_init__(self) -> None:
        if not self.sku or not self.sku.strip():
            raise ValidationError("SKU cannot be empty", field="sku")
        if self.quantity < 1:
            raise ValidationError(
                "Quantity must be at least 1", field="quantity", value=self.quantity
            )

    @property
    def subtotal(self) -> Money:
        return self.unit_price.multiply(self.quantity)


@dataclass(eq=False)
class Order(AggregateRoot[OrderId]):
    """
    Order placed by a customer.

    Business Rules:
    - An order has at least one line and all lines share one currency
    - pending -> paid -> shipped; pending and paid orders can be cancelled
    - shipped and cancelled are terminal
    - Paying needs a payment reference, shipping needs a tracking number
    - State only changes through the methods below
    """

    id: OrderId
    customer_email: str
    shipping_address: str
    lines: tuple[OrderLine, ...]
    status: OrderStatus = OrderStatus.PENDING
    payment_reference: str | None = None
    tracking_number: str | None = None
    cancellation_reason: str | None = None
    placed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    paid_at: datetime | None = None
    shipped_at: datetime | None = None
    cancelled_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.lines = tuple(self.lines)
        if "@" not in self.customer_email:
            raise ValidationError(
                "Customer email is not valid", field="customer_email", value=self.customer_email
            )
        if not self.shipping_address or not self.shipping_address.strip():
            raise ValidationError("Shipping address cannot be empty", field="shipping_address")
        if not self.lines:
            raise InvariantViolationError("Order", "an order needs at least one line")
        currencies = {line.unit_price.currency for line in self.lines}
        if len(currencies) > 1:
            raise InvariantViolationError("Order", "all lines must share one currency")
        if self.status in (OrderStatus.PAID, OrderStatus.SHIPPED) and not self.payment_reference:
            raise InvariantViolationError("Order", f"a {self.status} order needs a payment")
        if self.status == OrderStatus.SHIPPED and not self.tracking_number:
            raise InvariantViolationError("Order", "a shipped order needs a tracking number")

    @property
    def currency(self) -> str:
        return self.lines[0].unit_price.currency

    @property
    def total(self) -> Money:
        total = Money.zero(self.currency)
        for line in self.lines:
            total = total.add(line.subtotal)
        return total

    @property
    def is_paid(self) -> bool:
        """True when money was taken for this order, even if it was cancelled afterwards."""
        return self.payment_reference is not None

    def can_transition_to(self, status: OrderStatus) -> bool:
        return status in _ALLOWED_TRANSITIONS[self.status]

    def ensure_can_transition_to(self, status: OrderStatus) -> None:
        """
        Check a transition without performing it.

        Lets a use case fail before calling an external service.

        Raises:
            InvalidOrderTransitionError: If the current status forbids the move
        """
        if not self.can_transition_to(status):
            raise InvalidOrderTransitionError(self.id.value, self.status.value, status.value)

    def mark_as_paid(self, payment_reference: str) -> None:
        """
        Record a successful payment.

        Args:
            payment_reference: Transaction id issued by the payment provider

        Raises:
            InvalidOrderTransitionError: If the order is not pending
            ValidationError: If the reference is empty
        """
        self.ensure_can_transition_to(OrderStatus.PAID)
        if not payment_reference or not payment_reference.strip():
            raise ValidationError("Payment reference cannot be empty", field="payment_reference")

        self.status = OrderStatus.PAID
        self.payment_reference = payment_reference.strip()
        self.paid_at = datetime.now(UTC)
        self._record_event(
            OrderPaid(
                order_id=self.id,
                amount=self.total,
                payment_reference=self.payment_reference,
            )
        )

    def ship(self, tracking_number: str) -> None:
        """
        Hand the order over to a carrier.

        Raises:
            InvalidOrderTransitionError: If the order is not paid
            ValidationError: If the tracking number is empty
        """
        self.ensure_can_transition_to(OrderStatus.SHIPPED)
        if not tracking_number or not tracking_number.strip():
            raise ValidationError("Tracking number cannot be empty", field="tracking_number")

        self.status = OrderStatus.SHIPPED
        self.tracking_number = tracking_number.strip()
        self.shipped_at = datetime.now(UTC)
        self._record_event(OrderShipped(order_id=self.id, tracking_number=self.tracking_number))

    def cancel(self, reason: str) -> None:
        """
        Cancel a pending or paid order.

        Raises:
            InvalidOrderTransitionError: If the order was shipped or already cancelled
            ValidationError: If no reason is given
        """
        self.ensure_can_transition_to(OrderStatus.CANCELLED)
        if not reason or not reason.strip():
            raise ValidationError("Cancellation reason cannot be empty", field="reason")

        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason.strip()
        self.cancelled_at = datetime.now(UTC)
        self._record_event(
            OrderCancelled(
                order_id=self.id,
                reason=self.cancellation_reason,
                refund_due=self.is_paid,
            )
        )

    @classmethod
    def place(
        cls,
        customer_email: str,
        shipping_address: str,
        lines: Iterable[OrderLine],
    ) -> "Order":
        """Create a new pending order (ID will be 0 until persisted)."""
        return cls(
            id=OrderId.generate(),
            customer_email=customer_email.strip().lower(),
            shipping_address=shipping_address.strip(),
            lines=tuple(lines),
        )

    @classmethod
    def create_with_id(
        cls,
        id: OrderId,
        customer_email: str,
        shipping_address: str,
        lines: Iterable[OrderLine],
        status: OrderStatus,
        placed_at: datetime,
        payment_reference: str | None = None,
        tracking_number: str | None = None,
        cancellation_reason: str | None = None,
        paid_at: datetime | None = None,
        shipped_at: datetime | None = None,
        cancelled_at: datetime | None = None,
    ) -> "Order":
        """Reconstitute an order from persistence."""
        return cls(
            id=id,
            customer_email=customer_email,
            shipping_address=shipping_address,
            lines=tuple(lines),
            status=status,
            payment_reference=payment_reference,
            tracking_number=tracking_number,
            cancellation_reason=cancellation_reason,
            placed_at=placed_at,
            paid_at=paid_at,
            shipped_at=shipped_at,
            cancelled_at=cancelled_at,
        )
