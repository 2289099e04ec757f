from .notifier import NotifierProtocol
from .order_repository import OrderRepositoryProtocol
from .payment_gateway import PaymentGatewayProtocol, PaymentReceipt
from .shipping_carrier import ShippingCarrierProtocol

__all__ = [
    "NotifierProtocol",
    "OrderRepositoryProtocol",
    "PaymentGatewayProtocol",
    "PaymentReceipt",
    "ShippingCarrierProtocol",
]
