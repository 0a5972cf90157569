"""Currency codes used in payment processing."""

from dataclasses import dataclass
from typing import ClassVar

_KNOWN_CODES = (
    "USD", "EUR", "GBP", "JPY", "CHF", "CAD", "AUD", "CNY", "INR", "BRL",
    "MXN", "SEK", "NOK", "DKK", "PLN", "CZK", "HUF", "SGD", "HKD", "NZD",
    "BTC", "ETH", "USDT", "USDC",
)

_MINOR_UNITS = {"JPY": 0, "HUF": 0, "BTC": 8, "ETH": 18}
_DEFAULT_MINOR_UNITS = 2


def _is_other_code(code: str) -> bool:
    return len(code) == 3 and all("A" <= ch <= "Z" for ch in code)


@dataclass(frozen=True)
class Currency:
    """An ISO 4217 currency, a well-known crypto asset, or any 3-letter uppercase code."""

    code: str

    USD: ClassVar["Currency"]
    EUR: ClassVar["Currency"]
    GBP: ClassVar["Currency"]
    JPY: ClassVar["Currency"]
    CHF: ClassVar["Currency"]
    CAD: ClassVar["Currency"]
    AUD: ClassVar["Currency"]
    CNY: ClassVar["Currency"]
    INR: ClassVar["Currency"]
    BRL: ClassVar["Currency"]
    MXN: ClassVar["Currency"]
    SEK: ClassVar["Currency"]
    NOK: ClassVar["Currency"]
    DKK: ClassVar["Currency"]
    PLN: ClassVar["Currency"]
    CZK: ClassVar["Currency"]
    HUF: ClassVar["Currency"]
    SGD: ClassVar["Currency"]
    HKD: ClassVar["Currency"]
    NZD: ClassVar["Currency"]
    BTC: ClassVar["Currency"]
    ETH: ClassVar["Currency"]
    USDT: ClassVar["Currency"]
    USDC: ClassVar["Currency"]

    def __post_init__(self) -> None:
        if not isinstance(self.code, str):
            raise TypeError("currency code must be a string")
        if self.code not in _KNOWN_CODES and not _is_other_code(self.code):
            raise ValueError(f"invalid currency code: {self.code!r}")

    @classmethod
    def parse(cls, code: str) -> "Currency":
        """Return the currency for a code, raising ValueError if it is malformed."""
        return cls(code)

    @property
    def is_known(self) -> bool:
        """Whether this is one of the predefined currencies."""
        return self.code in _KNOWN_CODES

    def minor_units(self) -> int:
        """Number of minor unit digits (2 for USD cents, 0 for JPY)."""
        return _MINOR_UNITS.get(self.code, _DEFAULT_MINOR_UNITS)

    def __str__(self) -> str:
        return self.code


for _code in _KNOWN_CODES:
    setattr(Currency, _code, Currency(_code))
del _code