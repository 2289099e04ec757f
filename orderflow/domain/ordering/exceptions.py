"""Ordering module domain exceptions."""

from orderflow.domain.common.exceptions import BusinessRuleViolationError, EntityNotFoundError


class OrderNotFoundError(EntityNotFoundError):
    """Raised when an order cannot be loaded."""

    def __init__(self, order_id: int) -> None:
        super().__init__("Order", order_id)


class InvalidOrderTransitionError(BusinessRuleViolationError):
    """Raised when an order is asked to move to a status its current status forbids."""

    def __init__(self, order_id: int, current: str, target: str) -> None:
        super().__init__(
            rule="order_status_transition",
            message=f"Order {order_id} cannot move from '{current}' to '{target}'",
        )
        self.details.update({"order_id": order_id, "current": current, "target": target})
        self.order_id = order_id
        self.current = current
        self.target = target
