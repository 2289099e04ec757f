"""Money value object."""

import re
from dataclasses import dataclass
from typing import Self

from ..exceptions import ValidationError
from ..value_object import ValueObject

_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class Money(ValueObject):
    """
    An amount in the smallest unit of a currency.

    Amounts are integer cents so sums never drift. Arithmetic is only
    defined between amounts of the same currency.
    """

    amount_cents: int
    currency: str

    def __post_init__(self) -> None:
        if self.amount_cents < 0:
            raise ValidationError(
                "Amount cannot be negative", field="amount_cents", value=self.amount_cents
            )
        if not _CURRENCY_PATTERN.match(self.currency):
            raise ValidationError(
                "Currency must be a three-letter ISO code", field="currency", value=self.currency
            )

    @classmethod
    def zero(cls, currency: str) -> Self:
        return cls(0, currency)

    def add(self, other: "Money") -> "Money":
        if other.currency != self.currency:
            raise ValidationError(
                f"Cannot add {other.currency} to {self.currency}",
                field="currency",
                value=other.currency,
            )
        return Money(self.amount_cents + other.amount_cents, self.currency)

    def multiply(self, quantity: int) -> "Money":
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative", field="quantity", value=quantity)
        return Money(self.amount_cents * quantity, self.currency)

    def __str__(self) -> str:
        units, cents = divmod(self.amount_cents, 100)
        return f"{units}.{cents:02d} {self.currency}"
