"""In-process payment gateway for development and tests."""

import uuid

import structlog

from orderflow.application.ordering.protocols.payment_gateway import PaymentReceipt
from orderflow.domain.common.value_objects import Money
from orderflow.exceptions import PaymentDeclinedError, ServiceError

logger = structlog.get_logger(__name__)

TRANSACTION_PREFIX = "txn_"


class SandboxPaymentGateway:
    """
    Payment gateway that never leaves the process.

    Charges succeed unless they exceed ``decline_above_cents``, which makes
    the declined path reachable without a real provider. Holds no state, so
    a charge made by one process can be refunded by another.
    """

    def __init__(self, decline_above_cents: int | None = None) -> None:
        self.decline_above_cents = decline_above_cents

    def charge(self, amount: Money, reference: str) -> PaymentReceipt:
        if self.decline_above_cents is not None and amount.amount_cents > self.decline_above_cents:
            logger.info("sandbox_charge_declined", reference=reference, amount=str(amount))
            raise PaymentDeclinedError(reference, "amount exceeds sandbox limit")

        transaction_id = f"{TRANSACTION_PREFIX}{uuid.uuid4().hex[:16]}"
        logger.info(
            "sandbox_charge_succeeded",
            reference=reference,
            transaction_id=transaction_id,
            amount=str(amount),
        )
        return PaymentReceipt(transaction_id=transaction_id, amount=amount)

    def refund(self, transaction_id: str, amount: Money) -> None:
        if not transaction_id.startswith(TRANSACTION_PREFIX):
            raise ServiceError(
                f"Transaction {transaction_id} was not issued by the sandbox", status_code=502
            )
        logger.info("sandbox_refund_succeeded", transaction_id=transaction_id, amount=str(amount))
