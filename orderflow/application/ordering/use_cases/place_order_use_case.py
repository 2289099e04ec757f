"""Use case for placing orders."""

from dataclasses import dataclass

import structlog

from orderflow.application.common.use_case import Command, UseCase
from orderflow.application.ordering.protocols.order_repository import OrderRepositoryProtocol
from orderflow.domain.common.value_objects import Money
from orderflow.domain.ordering.entities import Order, OrderLine
from orderflow.exceptions import ValidationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderLineInput:
    sku: str
    quantity: int
    unit_price_cents: int


@dataclass(frozen=True)
class PlaceOrderCommand(Command):
    customer_email: str
    shipping_address: str
    currency: str
    lines: tuple[OrderLineInput, ...]


class PlaceOrderUseCase(UseCase[PlaceOrderCommand, Order]):
    """Use case for placing a new order."""

    def __init__(self, order_repository: OrderRepositoryProtocol) -> None:
        """Initialize use case with repository protocols."""
        self.order_repository = order_repository

    def execute(self, command: PlaceOrderCommand) -> Order:
        """
        Place a new pending order.

        Args:
            command: Customer, shipping address, currency and lines

        Returns:
            Saved order domain entity

        Raises:
            ValidationError: If the command carries no lines
            DomainError: If a line or the order breaks a domain rule
        """
        if not command.lines:
            raise ValidationError("An order needs at least one line")

        currency = command.currency.strip().upper()
        lines = [
            OrderLine(
                sku=line.sku.strip(),
                quantity=line.quantity,
                unit_price=Money(line.unit_price_cents, currency),
            )
            for line in command.lines
        ]
        order = Order.place(
            customer_email=command.customer_email,
            shipping_address=command.shipping_address,
            lines=lines,
        )
        order = self.order_repository.save(order)

        logger.info(
            "order_placed",
            order_id=order.id.value,
            line_count=len(order.lines),
            total=str(order.total),
        )
        return order
