from .shipment_worker import ShipmentBatchResult, ShipmentWorker, run_shipment_worker

__all__ = [
    "ShipmentBatchResult",
    "ShipmentWorker",
    "run_shipment_worker",
]
