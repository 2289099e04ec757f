"""Protocol for Order repository in ordering context."""

from typing import Protocol

from orderflow.application.common.pagination import Pagination
from orderflow.domain.common.value_objects import OrderId
from orderflow.domain.ordering.entities import Order, OrderStatus


class OrderRepositoryProtocol(Protocol):
    """Persistence boundary for Order aggregates."""

    def get(self, order_id: OrderId) -> Order:
        """
        Load an order.

        Args:
            order_id: The order ID

        Returns:
            Order entity

        Raises:
            OrderNotFoundError: If no order has this ID
        """
        ...

    def save(self, order: Order) -> Order:
        """
        Persist the whole order (create or update).

        Args:
            order: The order entity to save

        Returns:
            Saved order entity with storage-assigned values
        """
        ...

    def list_by_status(
        self, status: OrderStatus | None, pagination: Pagination
    ) -> tuple[list[Order], int]:
        """
        Page through orders, oldest first.

        Args:
            status: Only return orders in this status; None for all
            pagination: Page to return

        Returns:
            Tuple of (orders on the page, total matching orders)
        """
        ...
