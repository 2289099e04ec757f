"""In-memory Order repository for tests and local experiments."""

import copy
import itertools

from orderflow.application.common.pagination import Pagination
from orderflow.domain.common.value_objects import OrderId
from orderflow.domain.ordering.entities import Order, OrderStatus
from orderflow.domain.ordering.exceptions import OrderNotFoundError


class InMemoryOrderRepository:
    """
    Dict-backed repository with the same contract as OrderRepository.

    Stores and returns copies so callers never share an instance with the
    store, the same way a database round-trip would behave.
    """

    def __init__(self) -> None:
        self._orders: dict[int, Order] = {}
        self._ids = itertools.count(1)

    def get(self, order_id: OrderId) -> Order:
        stored = self._orders.get(order_id.value)
        if stored is None:
            raise OrderNotFoundError(order_id.value)
        return copy.deepcopy(stored)

    def save(self, order: Order) -> Order:
        stored = copy.deepcopy(order)
        stored.collect_events()
        if not stored.id.is_assigned:
            stored.id = OrderId(next(self._ids))
        elif stored.id.value not in self._orders:
            raise OrderNotFoundError(stored.id.value)
        self._orders[stored.id.value] = stored
        return copy.deepcopy(stored)

    def list_by_status(
        self, status: OrderStatus | None, pagination: Pagination
    ) -> tuple[list[Order], int]:
        matching = [
            order
            for order in sorted(self._orders.values(), key=lambda o: (o.placed_at, o.id.value))
            if status is None or order.status == status
        ]
        page = matching[pagination.offset : pagination.offset + pagination.limit]
        return [copy.deepcopy(order) for order in page], len(matching)
