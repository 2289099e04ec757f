from .order_schemas import (
    OrderCancelRequest,
    OrderCreateRequest,
    OrderLineRequest,
    OrderLineResponse,
    OrderListResponse,
    OrderPaymentRequest,
    OrderResponse,
)

__all__ = [
    "OrderCancelRequest",
    "OrderCreateRequest",
    "OrderLineRequest",
    "OrderLineResponse",
    "OrderListResponse",
    "OrderPaymentRequest",
    "OrderResponse",
]
