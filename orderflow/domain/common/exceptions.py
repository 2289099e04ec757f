"""
Domain layer exceptions.

Entities and repositories raise these; entry points decide what the
caller sees. ``details`` carries the machine-readable part of the error.
"""

_PRIMITIVES = (str, int, float, bool)


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message

    @property
    def context(self) -> dict[str, object]:
        """Details reduced to JSON-safe primitives."""
        return {
            key: value if value is None or isinstance(value, _PRIMITIVES) else str(value)
            for key, value in self.details.items()
        }


class ValidationError(DomainError):
    """A value handed to the domain is malformed (bad currency code, zero quantity)."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """
    A request conflicts with the current state of an aggregate.

    ``rule`` names the rule so clients can branch on it without parsing
    the message.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})
        self.rule = rule


class InvariantViolationError(DomainError):
    """An aggregate would end up in a state it must never be in."""

    def __init__(self, aggregate: str, invariant: str) -> None:
        super().__init__(
            f"Invariant violation in {aggregate}: {invariant}",
            {"aggregate": aggregate, "invariant": invariant},
        )
        self.aggregate = aggregate
        self.invariant = invariant
