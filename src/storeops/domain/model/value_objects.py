"""Value Objects shared across the domain: Money and Quantity."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storeops.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "BDT"

# Amounts are held in minor units of two decimal places (paisa, cents).
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative amount in one currency, rounded half-up to two places.

    Stored as text and never converted through float, so an amount read
    back from either backend compares equal to the one written.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        object.__setattr__(self, "amount", self.amount.quantize(_CENTS, ROUND_HALF_UP))

    def __add__(self, other: Money) -> Money:
        self._same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._same_currency(other)
        if other.amount > self.amount:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, units: int) -> Money:
        if not isinstance(units, int):
            raise TypeError(f"Can only multiply Money by int, got {type(units).__name__}")
        return Money(self.amount * units, self.currency)

    def __gt__(self, other: Money) -> bool:
        self._same_currency(other)
        return self.amount > other.amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def _same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Parse user or config input (``"1500"``, ``"99.5"``) into Money."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal(0), currency)

    @staticmethod
    def total(amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        result = Money.zero(currency)
        for amount in amounts:
            result = result + amount
        return result


@dataclass(frozen=True)
class Quantity:
    """Units of one product on a line item; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
