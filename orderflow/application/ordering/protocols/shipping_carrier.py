from typing import Protocol


class ShippingCarrierProtocol(Protocol):
    def create_shipment(self, reference: str, address: str) -> str:
        """Book a shipment and return its tracking number."""
        ...
