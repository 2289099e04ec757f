"""Events recorded by the Order aggregate."""

from dataclasses import dataclass

from orderflow.domain.common.domain_event import DomainEvent
from orderflow.domain.common.value_objects import Money, OrderId


@dataclass(frozen=True)
class OrderPaid(DomainEvent):
    order_id: OrderId
    amount: Money
    payment_reference: str


@dataclass(frozen=True)
class OrderShipped(DomainEvent):
    order_id: OrderId
    tracking_number: str


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    order_id: OrderId
    reason: str
    refund_due: bool
