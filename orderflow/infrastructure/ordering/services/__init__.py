from .http_payment_gateway import HttpPaymentGateway
from .logging_notifier import LoggingNotifier
from .payment_gateway_factory import create_payment_gateway
from .sandbox_payment_gateway import SandboxPaymentGateway
from .sandbox_shipping_carrier import SandboxShippingCarrier

__all__ = [
    "HttpPaymentGateway",
    "LoggingNotifier",
    "SandboxPaymentGateway",
    "SandboxShippingCarrier",
    "create_payment_gateway",
]
