"""Use case for shipping orders."""

from dataclasses import dataclass

import structlog

from orderflow.application.common.use_case import Command, UseCase
from orderflow.application.ordering.protocols.notifier import NotifierProtocol
from orderflow.application.ordering.protocols.order_repository import OrderRepositoryProtocol
from orderflow.application.ordering.protocols.shipping_carrier import ShippingCarrierProtocol
from orderflow.domain.common.value_objects import OrderId
from orderflow.domain.ordering.entities import Order, OrderStatus

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ShipOrderCommand(Command):
    order_id: int


class ShipOrderUseCase(UseCase[ShipOrderCommand, Order]):
    """Use case for booking a shipment and marking an order as shipped."""

    def __init__(
        self,
        order_repository: OrderRepositoryProtocol,
        shipping_carrier: ShippingCarrierProtocol,
        notifier: NotifierProtocol,
    ) -> None:
        """Initialize use case with repository and service protocols."""
        self.order_repository = order_repository
        self.shipping_carrier = shipping_carrier
        self.notifier = notifier

    def execute(self, command: ShipOrderCommand) -> Order:
        """
        Book a shipment for a paid order.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidOrderTransitionError: If the order is not paid
        """
        order = self.order_repository.get(OrderId(command.order_id))
        order.ensure_can_transition_to(OrderStatus.SHIPPED)

        tracking_number = self.shipping_carrier.create_shipment(
            reference=f"order-{order.id}",
            address=order.shipping_address,
        )
        order.ship(tracking_number)

        events = order.collect_events()
        order = self.order_repository.save(order)
        self.notifier.publish(events)

        logger.info("order_shipped", order_id=order.id.value, tracking_number=tracking_number)
        return order
