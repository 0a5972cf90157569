"""Monetary amounts stored in minor units."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping

from ledgerkit.currency import Currency


@dataclass(frozen=True)
class Money:
    """An amount in the smallest unit of its currency (1000 = 10.00 USD)."""

    amount: int
    currency: Currency

    @classmethod
    def from_major(cls, amount: float, currency: Currency) -> "Money":
        """Build from a major-unit amount, rounding half away from zero."""
        scaled = float(amount) * float(10 ** currency.minor_units())
        rounded = Decimal(scaled).to_integral_value(rounding=ROUND_HALF_UP)
        return cls(int(rounded), currency)

    def to_major(self) -> float:
        """The amount in major units as a float."""
        return self.amount / 10 ** self.currency.minor_units()

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __abs__(self) -> "Money":
        return Money(abs(self.amount), self.currency)

    def __str__(self) -> str:
        digits = self.currency.minor_units()
        if digits == 0:
            return f"{self.amount} {self.currency}"
        quotient, remainder = divmod(abs(self.amount), 10 ** digits)
        major = -quotient if self.amount < 0 else quotient
        return f"{major}.{remainder:0{digits}d} {self.currency}"

    def to_dict(self) -> dict:
        return {"amount": self.amount, "currency": str(self.currency)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Money":
        return cls(int(data["amount"]), Currency.parse(data["currency"]))