"""Application exception hierarchy for orderflow."""


class OrderflowError(Exception):
    """Base exception for all orderflow application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(OrderflowError):
    """Invalid use case input."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class ServiceError(OrderflowError):
    """An external capability failed."""


class PaymentDeclinedError(ServiceError):
    """The payment provider refused the charge."""

    def __init__(self, reference: str, reason: str) -> None:
        """Initialize with the charge reference and the provider's reason."""
        self.reference = reference
        self.reason = reason
        super().__init__(f"Payment for {reference} was declined: {reason}", status_code=402)


class ExternalServiceError(ServiceError):
    """An external service could not be reached or answered unexpectedly."""

    def __init__(self, service: str, reason: str) -> None:
        """Initialize with the service name and what went wrong."""
        self.service = service
        self.reason = reason
        super().__init__(f"{service} is unavailable: {reason}", status_code=502)
