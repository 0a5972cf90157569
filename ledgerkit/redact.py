"""Helpers that keep sensitive values out of logs."""

from typing import Generic, TypeVar

T = TypeVar("T")

_REDACTED = "[REDACTED]"


class RedactedValue(Generic[T]):
    """Holds a value for use at runtime while hiding it in str and repr."""

    __slots__ = ("_inner",)

    def __init__(self, value: T) -> None:
        self._inner = value

    def reveal(self) -> T:
        """The wrapped value."""
        return self._inner

    def to_dict(self) -> dict:
        return {"redacted": True}

    def __str__(self) -> str:
        return _REDACTED

    def __repr__(self) -> str:
        return _REDACTED


def redact_card(number: str) -> str:
    """Mask a card number, keeping only its last four characters."""
    if len(number) < 4:
        return "****"
    return f"****{number[-4:]}"


def redact_email(email: str) -> str:
    """Mask an e-mail address, keeping only its domain."""
    _, sep, domain = email.partition("@")
    return f"***@{domain}" if sep else "***"