from dataclasses import dataclass
from typing import Protocol

from orderflow.domain.common.value_objects import Money


@dataclass(frozen=True)
class PaymentReceipt:
    transaction_id: str
    amount: Money


class PaymentGatewayProtocol(Protocol):
    def charge(self, amount: Money, reference: str) -> PaymentReceipt: ...

    def refund(self, transaction_id: str, amount: Money) -> None: ...
