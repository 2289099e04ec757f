"""Shipping carrier stand-in that books nothing and issues tracking numbers."""

import uuid

import structlog

logger = structlog.get_logger(__name__)


class SandboxShippingCarrier:
    def create_shipment(self, reference: str, address: str) -> str:
        tracking_number = f"SBX-{uuid.uuid4().hex[:12].upper()}"
        logger.info(
            "sandbox_shipment_created",
            reference=reference,
            tracking_number=tracking_number,
        )
        return tracking_number
