"""Use case for paying orders."""

from dataclasses import dataclass

import structlog

from orderflow.application.common.use_case import Command, UseCase
from orderflow.application.ordering.protocols.notifier import NotifierProtocol
from orderflow.application.ordering.protocols.order_repository import OrderRepositoryProtocol
from orderflow.application.ordering.protocols.payment_gateway import PaymentGatewayProtocol
from orderflow.domain.common.value_objects import OrderId
from orderflow.domain.ordering.entities import Order, OrderStatus
from orderflow.exceptions import ValidationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PayOrderCommand(Command):
    order_id: int
    amount_cents: int


class PayOrderUseCase(UseCase[PayOrderCommand, Order]):
    """Use case for charging the customer and marking an order as paid."""

    def __init__(
        self,
        order_repository: OrderRepositoryProtocol,
        payment_gateway: PaymentGatewayProtocol,
        notifier: NotifierProtocol,
    ) -> None:
        """Initialize use case with repository and service protocols."""
        self.order_repository = order_repository
        self.payment_gateway = payment_gateway
        self.notifier = notifier

    def execute(self, command: PayOrderCommand) -> Order:
        """
        Charge the order total and mark the order as paid.

        Args:
            command: Order ID and the amount the customer confirmed

        Returns:
            Paid order domain entity

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidOrderTransitionError: If the order is not pending
            ValidationError: If the confirmed amount differs from the order total
            PaymentDeclinedError: If the gateway refuses the charge
        """
        order = self.order_repository.get(OrderId(command.order_id))

        # Nothing is charged unless the order can actually be paid
        order.ensure_can_transition_to(OrderStatus.PAID)
        if command.amount_cents != order.total.amount_cents:
            raise ValidationError(
                f"Payment amount {command.amount_cents} does not match "
                f"order total {order.total.amount_cents}"
            )

        receipt = self.payment_gateway.charge(order.total, reference=f"order-{order.id}")
        order.mark_as_paid(receipt.transaction_id)

        events = order.collect_events()
        order = self.order_repository.save(order)
        self.notifier.publish(events)

        logger.info(
            "order_paid",
            order_id=order.id.value,
            transaction_id=receipt.transaction_id,
        )
        return order
