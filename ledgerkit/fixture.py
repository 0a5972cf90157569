"""Test fixtures describing sequences of payment events."""

import json
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from ledgerkit.currency import Currency
from ledgerkit.events import CanonicalEvent, EventKind
from ledgerkit.money import Money
from ledgerkit.payment import PaymentId
from ledgerkit.provider import ProviderId


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field '{key}'") from None


@dataclass
class FixtureEvent:
    """One event in a fixture sequence."""

    kind: EventKind
    amount_minor: int
    currency: Currency
    delay_ms: Optional[int] = None
    metadata: Any = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "amount_minor": self.amount_minor,
            "currency": str(self.currency),
            "delay_ms": self.delay_ms,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FixtureEvent":
        if not isinstance(data, Mapping):
            raise ValueError("fixture event must be an object")
        amount = _require(data, "amount_minor")
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise ValueError("amount_minor must be an integer")
        delay = data.get("delay_ms")
        if delay is not None and (
            not isinstance(delay, int) or isinstance(delay, bool) or delay < 0
        ):
            raise ValueError("delay_ms must be a non-negative integer")
        return cls(
            kind=EventKind(_require(data, "kind")),
            amount_minor=amount,
            currency=Currency.parse(_require(data, "currency")),
            delay_ms=delay,
            metadata=data.get("metadata"),
        )


@dataclass
class Fixture:
    """A named scenario of payment events from one provider."""

    name: str
    provider: str
    events: List[FixtureEvent] = field(default_factory=list)
    description: Optional[str] = None

    @classmethod
    def successful_payment(cls, amount: int, currency: Currency) -> "Fixture":
        """An authorise then capture flow."""
        return cls(
            name="successful_payment",
            description="A standard authorize -> capture flow",
            provider="mock",
            events=[
                FixtureEvent(EventKind.PAYMENT_CREATED, amount, currency),
                FixtureEvent(EventKind.PAYMENT_AUTHORIZED, amount, currency, delay_ms=100),
                FixtureEvent(EventKind.PAYMENT_CAPTURED, amount, currency, delay_ms=200),
            ],
        )

    @classmethod
    def failed_payment(cls, amount: int, currency: Currency) -> "Fixture":
        """A payment that fails during authorisation."""
        return cls(
            name="failed_payment",
            description="A payment that fails during authorization",
            provider="mock",
            events=[
                FixtureEvent(EventKind.PAYMENT_CREATED, amount, currency),
                FixtureEvent(
                    EventKind.PAYMENT_FAILED,
                    amount,
                    currency,
                    delay_ms=100,
                    metadata={"reason": "insufficient_funds"},
                ),
            ],
        )

    @classmethod
    def refunded_payment(cls, amount: int, currency: Currency) -> "Fixture":
        """A captured payment that is refunded in full."""
        return cls(
            name="refunded_payment",
            description="A captured payment that is fully refunded",
            provider="mock",
            events=[
                FixtureEvent(EventKind.PAYMENT_CREATED, amount, currency),
                FixtureEvent(EventKind.PAYMENT_AUTHORIZED, amount, currency, delay_ms=100),
                FixtureEvent(EventKind.PAYMENT_CAPTURED, amount, currency, delay_ms=200),
                FixtureEvent(
                    EventKind.PAYMENT_REFUNDED,
                    amount,
                    currency,
                    delay_ms=500,
                    metadata={"reason": "customer_request"},
                ),
            ],
        )

    def to_canonical_events(self) -> List[CanonicalEvent]:
        """Canonical events for this fixture, all for one freshly generated payment."""
        payment_id = PaymentId.generate()
        provider_id = ProviderId(self.provider)
        return [
            CanonicalEvent(
                event.kind,
                payment_id=payment_id,
                provider_id=provider_id,
                amount=Money(event.amount_minor, event.currency),
            )
            for event in self.events
        ]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "provider": self.provider,
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Fixture":
        if not isinstance(data, Mapping):
            raise ValueError("fixture must be an object")
        events = _require(data, "events")
        if not isinstance(events, list):
            raise ValueError("events must be a list")
        return cls(
            name=str(_require(data, "name")),
            description=data.get("description"),
            provider=str(_require(data, "provider")),
            events=[FixtureEvent.from_dict(item) for item in events],
        )

    def to_json(self) -> str:
        """Pretty-printed JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "Fixture":
        return cls.from_dict(json.loads(text))