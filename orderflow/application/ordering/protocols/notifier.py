from collections.abc import Sequence
from typing import Protocol

from orderflow.domain.common.domain_event import DomainEvent


class NotifierProtocol(Protocol):
    def publish(self, events: Sequence[DomainEvent]) -> None: ...
