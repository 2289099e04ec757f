from .in_memory_order_repository import InMemoryOrderRepository
from .order_repository import OrderRepository

__all__ = [
    "InMemoryOrderRepository",
    "OrderRepository",
]
