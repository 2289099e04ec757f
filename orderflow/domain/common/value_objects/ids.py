from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class OrderId(EntityId):
    """Strongly-typed order identifier."""

    value: int
