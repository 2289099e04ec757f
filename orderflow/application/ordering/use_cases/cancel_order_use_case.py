"""Use case for cancelling orders."""

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
class CancelOrderCommand(Command):
    order_id: int
    reason: str


class CancelOrderUseCase(UseCase[CancelOrderCommand, Order]):
    """Use case for cancelling an order and refunding it when it was paid."""

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

    def execute(self, command: CancelOrderCommand) -> Order:
        """
        Cancel a pending or paid order.

        Raises:
            ValidationError: If no reason is given
            OrderNotFoundError: If the order does not exist
            InvalidOrderTransitionError: If the order was shipped or already cancelled
            ServiceError: If the refund fails
        """
        if not command.reason.strip():
            raise ValidationError("A cancellation reason is required")

        order = self.order_repository.get(OrderId(command.order_id))
        order.ensure_can_transition_to(OrderStatus.CANCELLED)

        order.cancel(command.reason)
        if order.payment_reference is not None:
            self.payment_gateway.refund(order.payment_reference, order.total)

        events = order.collect_events()
        order = self.order_repository.save(order)
        self.notifier.publish(events)

        logger.info("order_cancelled", order_id=order.id.value, refunded=order.is_paid)
        return order
