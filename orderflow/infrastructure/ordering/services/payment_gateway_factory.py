from orderflow.application.ordering.protocols.payment_gateway import PaymentGatewayProtocol
from orderflow.config import Settings
from orderflow.infrastructure.ordering.services.http_payment_gateway import HttpPaymentGateway
from orderflow.infrastructure.ordering.services.sandbox_payment_gateway import (
    SandboxPaymentGateway,
)


def create_payment_gateway(settings: Settings) -> PaymentGatewayProtocol:
    """Build the payment gateway named by PAYMENT_PROVIDER."""
    if settings.PAYMENT_PROVIDER == "http":
        if not settings.PAYMENT_API_URL or not settings.PAYMENT_API_KEY:
            raise ValueError("PAYMENT_API_URL and PAYMENT_API_KEY are required for 'http'")
        return HttpPaymentGateway(
            base_url=settings.PAYMENT_API_URL,
            api_key=settings.PAYMENT_API_KEY,
            timeout=settings.PAYMENT_TIMEOUT_SECONDS,
        )
    return SandboxPaymentGateway(decline_above_cents=settings.SANDBOX_DECLINE_ABOVE_CENTS)
