from .cancel_order_use_case import CancelOrderCommand, CancelOrderUseCase
from .get_order_use_case import GetOrderQuery, GetOrderUseCase
from .list_orders_use_case import ListOrdersQuery, ListOrdersUseCase
from .pay_order_use_case import PayOrderCommand, PayOrderUseCase
from .place_order_use_case import OrderLineInput, PlaceOrderCommand, PlaceOrderUseCase
from .ship_order_use_case import ShipOrderCommand, ShipOrderUseCase

__all__ = [
    "CancelOrderCommand",
    "CancelOrderUseCase",
    "GetOrderQuery",
    "GetOrderUseCase",
    "ListOrdersQuery",
    "ListOrdersUseCase",
    "OrderLineInput",
    "PayOrderCommand",
    "PayOrderUseCase",
    "PlaceOrderCommand",
    "PlaceOrderUseCase",
    "ShipOrderCommand",
    "ShipOrderUseCase",
]
