"""Background worker that ships paid orders."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from orderflow.application.common.pagination import MAX_PAGE_SIZE, Pagination
from orderflow.application.ordering.use_cases import (
    ListOrdersQuery,
    ListOrdersUseCase,
    ShipOrderCommand,
    ShipOrderUseCase,
)
from orderflow.core import container
from orderflow.domain.common.exceptions import DomainError
from orderflow.domain.ordering.entities import Order, OrderStatus
from orderflow.exceptions import OrderflowError
from orderflow.infrastructure.common.di import session_scope

logger = structlog.get_logger(__name__)


@dataclass
class ShipmentBatchResult:
    """Outcome of one worker pass."""

    shipped: list[int] = field(default_factory=list)
    failed: dict[int, str] = field(default_factory=dict)

    @property
    def processed(self) -> int:
        return len(self.shipped) + len(self.failed)


class ShipmentWorker:
    """
    Entry point that ships paid orders in batches.

    Each paid order is handed to ShipOrderUseCase on its own; one order
    failing does not stop the rest of the batch. Orders that failed stay
    paid and are deferred: later passes try other paid orders first and
    only retry deferred ones when the batch has room left.
    """

    def __init__(
        self,
        list_orders_use_case: ListOrdersUseCase,
        ship_order_use_case: ShipOrderUseCase,
        batch_size: int = 50,
        deferred: set[int] | None = None,
    ) -> None:
        self.list_orders_use_case = list_orders_use_case
        self.ship_order_use_case = ship_order_use_case
        self.batch_size = batch_size
        self.deferred = deferred if deferred is not None else set()

    def _select_batch(self) -> tuple[list[Order], int]:
        """Pick up to batch_size paid orders, fresh ones before deferred ones."""
        fresh: list[Order] = []
        retries: list[Order] = []
        seen: set[int] = set()
        page_size = min(self.batch_size, MAX_PAGE_SIZE)
        page_number = 1
        while True:
            page = self.list_orders_use_case.execute(
                ListOrdersQuery(
                    status=OrderStatus.PAID,
                    pagination=Pagination(page=page_number, page_size=page_size),
                )
            )
            for order in page.items:
                seen.add(order.id.value)
                if order.id.value in self.deferred:
                    retries.append(order)
                else:
                    fresh.append(order)
            if not page.has_next:
                # Deferred orders that are no longer paid drop out
                self.deferred &= seen
                break
            if len(fresh) >= self.batch_size:
                break
            page_number += 1

        return (fresh + retries)[: self.batch_size], page.total

    def run_once(self) -> ShipmentBatchResult:
        """
        Ship up to one batch of paid orders.

        Returns:
            Which orders were shipped and why the others failed
        """
        result = ShipmentBatchResult()
        batch, total_paid = self._select_batch()

        for order in batch:
            order_id = order.id.value
            try:
                self.ship_order_use_case.execute(ShipOrderCommand(order_id=order_id))
                result.shipped.append(order_id)
                self.deferred.discard(order_id)
            except (OrderflowError, DomainError) as e:
                logger.warning("shipment_failed", order_id=order_id, error=str(e))
                result.failed[order_id] = str(e)
                self.deferred.add(order_id)
            except Exception:
                logger.exception("shipment_crashed", order_id=order_id)
                result.failed[order_id] = "unexpected error"
                self.deferred.add(order_id)

        logger.info(
            "shipment_batch_finished",
            shipped=len(result.shipped),
            failed=len(result.failed),
            remaining=total_paid - len(result.shipped),
        )
        return result


def run_shipment_worker(
    poll_interval: float,
    batch_size: int,
    max_iterations: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Poll for paid orders until stopped.

    Every pass gets its own database session and freshly wired use cases;
    failed order ids carry over so they do not block the orders behind them.

    Args:
        poll_interval: Seconds to wait after a pass that shipped nothing
        batch_size: Maximum orders per pass
        max_iterations: Stop after this many passes; None runs forever
        sleep: Sleep function, replaceable in tests

    Returns:
        Total number of orders shipped
    """
    shipped_total = 0
    iteration = 0
    deferred: set[int] = set()
    while max_iterations is None or iteration < max_iterations:
        iteration += 1
        with session_scope():
            worker = ShipmentWorker(
                list_orders_use_case=container.list_orders_use_case(),
                ship_order_use_case=container.ship_order_use_case(),
                batch_size=batch_size,
                deferred=deferred,
            )
            result = worker.run_once()
        shipped_total += len(result.shipped)

        if not result.shipped and (max_iterations is None or iteration < max_iterations):
            sleep(poll_interval)

    return shipped_total
