"""Payment gateway backed by a remote payment provider's REST API."""

from typing import Any

import httpx
import structlog

from orderflow.application.ordering.protocols.payment_gateway import PaymentReceipt
from orderflow.domain.common.value_objects import Money
from orderflow.exceptions import ExternalServiceError, PaymentDeclinedError

logger = structlog.get_logger(__name__)

SERVICE_NAME = "payment provider"


def _json_body(response: httpx.Response) -> dict[str, Any]:
    """Decoded JSON object body, or an empty dict when there is none."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class HttpPaymentGateway:
    """HTTP client for the payment provider.

    ``POST /v1/charges`` takes the amount in cents, the currency and our
    reference, and answers with the charge id. ``POST /v1/refunds`` takes
    the charge id and amount. A 402 answer means the charge was declined.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self._headers = {"Authorization": f"Bearer {api_key}"}

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        try:
            return self._client.post(path, json=payload, headers=self._headers)
        except httpx.HTTPError as e:
            logger.warning("payment_provider_unreachable", path=path, error=str(e))
            raise ExternalServiceError(SERVICE_NAME, str(e)) from e

    def charge(self, amount: Money, reference: str) -> PaymentReceipt:
        response = self._post(
            "/v1/charges",
            {
                "amount": amount.amount_cents,
                "currency": amount.currency,
                "reference": reference,
            },
        )
        if response.status_code == httpx.codes.PAYMENT_REQUIRED:
            reason = _json_body(response).get("reason") or "declined"
            raise PaymentDeclinedError(reference, str(reason))
        if response.is_error:
            raise ExternalServiceError(SERVICE_NAME, f"charge failed with {response.status_code}")

        transaction_id = _json_body(response).get("id")
        if not isinstance(transaction_id, str) or not transaction_id:
            logger.warning("payment_charge_unreadable", reference=reference, body=response.text)
            raise ExternalServiceError(SERVICE_NAME, "charge response carried no charge id")
        logger.info("payment_charged", reference=reference, transaction_id=transaction_id)
        return PaymentReceipt(transaction_id=transaction_id, amount=amount)

    def refund(self, transaction_id: str, amount: Money) -> None:
        response = self._post(
            "/v1/refunds",
            {"charge_id": transaction_id, "amount": amount.amount_cents},
        )
        if response.is_error:
            raise ExternalServiceError(SERVICE_NAME, f"refund failed with {response.status_code}")
        logger.info("payment_refunded", transaction_id=transaction_id)
