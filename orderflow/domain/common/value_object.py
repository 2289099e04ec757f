"""
Base class for Value Objects.

Value Objects are immutable and defined by their attributes rather than by
identity. Two value objects are equal if all their attributes are equal.

Example:
    @dataclass(frozen=True)
    class Sku(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if not self.value.strip():
                raise ValidationError("SKU cannot be empty")
"""


class ValueObject:
    """
    Base class for Value Objects in the domain model.

    Subclasses are decorated with @dataclass(frozen=True) and validate
    themselves in __post_init__.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.__dict__.items())))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{self.__class__.__name__}({attrs})"

    def to_primitive(self) -> object:
        """
        Convert to a primitive Python value for serialization.

        Single-attribute value objects collapse to that attribute; others
        become a dict of their attributes.
        """
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return {
            key: value.to_primitive() if isinstance(value, ValueObject) else value
            for key, value in self.__dict__.items()
        }
