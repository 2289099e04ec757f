"""Notifier that writes domain events to the structured log."""

from collections.abc import Sequence

import structlog

from orderflow.domain.common.domain_event import DomainEvent

logger = structlog.get_logger(__name__)


class LoggingNotifier:
    def publish(self, events: Sequence[DomainEvent]) -> None:
        for event in events:
            logger.info("domain_event", **event.to_dict())
