"""Canonical payment lifecycle events."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from ledgerkit.money import Money
from ledgerkit.payment import PaymentId, PaymentState
from ledgerkit.provider import ProviderId


class EventKind(Enum):
    """Types of events in the payment lifecycle."""

    PAYMENT_CREATED = "payment_created"
    PAYMENT_PROCESSING = "payment_processing"
    PAYMENT_AUTHORIZED = "payment_authorized"
    PAYMENT_CAPTURED = "payment_captured"
    PAYMENT_FAILED = "payment_failed"
    PAYMENT_CANCELLED = "payment_cancelled"
    PAYMENT_REFUNDED = "payment_refunded"
    PAYMENT_PARTIALLY_REFUNDED = "payment_partially_refunded"
    PAYMENT_EXPIRED = "payment_expired"

    PAYOUT_CREATED = "payout_created"
    PAYOUT_SENT = "payout_sent"
    PAYOUT_FAILED = "payout_failed"
    PAYOUT_COMPLETED = "payout_completed"

    CHARGEBACK_OPENED = "chargeback_opened"
    CHARGEBACK_WON = "chargeback_won"
    CHARGEBACK_LOST = "chargeback_lost"
    CHARGEBACK_CLOSED = "chargeback_closed"

    WEBHOOK_RECEIVED = "webhook_received"
    WEBHOOK_VERIFIED = "webhook_verified"
    WEBHOOK_REJECTED = "webhook_rejected"

    CONNECTOR_ERROR = "connector_error"
    RETRY_SCHEDULED = "retry_scheduled"
    RETRY_EXHAUSTED = "retry_exhausted"

    def to_payment_state(self) -> Optional[PaymentState]:
        """The payment state this event leads to, if it is a payment event."""
        return _KIND_TO_STATE.get(self)

    def __str__(self) -> str:
        return self.value


_KIND_TO_STATE = {
    EventKind.PAYMENT_CREATED: PaymentState.CREATED,
    EventKind.PAYMENT_PROCESSING: PaymentState.PROCESSING,
    EventKind.PAYMENT_AUTHORIZED: PaymentState.AUTHORIZED,
    EventKind.PAYMENT_CAPTURED: PaymentState.CAPTURED,
    EventKind.PAYMENT_FAILED: PaymentState.FAILED,
    EventKind.PAYMENT_CANCELLED: PaymentState.CANCELLED,
    EventKind.PAYMENT_REFUNDED: PaymentState.REFUNDED,
    EventKind.PAYMENT_PARTIALLY_REFUNDED: PaymentState.PARTIALLY_REFUNDED,
    EventKind.PAYMENT_EXPIRED: PaymentState.EXPIRED,
}


def _new_id() -> str:
    return str(uuid.uuid4())


def _isoformat(moment: datetime) -> str:
    return moment.isoformat()


@dataclass
class CanonicalEvent:
    """A payment event normalised from any provider."""

    kind: EventKind
    event_id: str = field(default_factory=_new_id)
    payment_id: Optional[PaymentId] = None
    provider_id: Optional[ProviderId] = None
    provider_event_id: Optional[str] = None
    amount: Optional[Money] = None
    occurred_at: Optional[datetime] = None
    received_at: Optional[datetime] = None
    correlation_id: str = field(default_factory=_new_id)
    metadata: Any = None
    raw_payload: Any = None

    def __post_init__(self) -> None:
        now = datetime.now(timezone.utc)
        if self.occurred_at is None:
            self.occurred_at = now
        if self.received_at is None:
            self.received_at = now

    def to_dict(self) -> dict:
        """A JSON-ready representation of the event."""
        return {
            "event_id": self.event_id,
            "kind": self.kind.value,
            "payment_id": None if self.payment_id is None else str(self.payment_id),
            "provider_id": None if self.provider_id is None else str(self.provider_id),
            "provider_event_id": self.provider_event_id,
            "amount": None if self.amount is None else self.amount.to_dict(),
            "occurred_at": _isoformat(self.occurred_at),
            "received_at": _isoformat(self.received_at),
            "correlation_id": self.correlation_id,
            "metadata": self.metadata,
            "raw_payload": self.raw_payload,
        }