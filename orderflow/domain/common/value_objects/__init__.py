"""Common value objects shared across all domain modules."""

from .ids import OrderId
from .money import Money

__all__ = [
    "Money",
    "OrderId",
]
