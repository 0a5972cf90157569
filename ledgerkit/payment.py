"""Payment identifiers, states and methods."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ledgerkit.money import Money
from ledgerkit.provider import ProviderId


@dataclass(frozen=True)
class PaymentId:
    """Unique payment identifier."""

    value: str

    @classmethod
    def generate(cls) -> "PaymentId":
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value


class PaymentState(Enum):
    """High-level payment state machine."""

    CREATED = "created"
    PROCESSING = "processing"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    PARTIALLY_CAPTURED = "partially_captured"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"
    DISPUTED = "disputed"
    EXPIRED = "expired"

    def is_terminal(self) -> bool:
        return self in _TERMINAL

    def valid_transitions(self) -> tuple:
        """The states this state may move to next."""
        return _TRANSITIONS[self]

    def can_transition_to(self, next_state: "PaymentState") -> bool:
        return next_state in _TRANSITIONS[self]


_TERMINAL = frozenset({
    PaymentState.CAPTURED,
    PaymentState.FAILED,
    PaymentState.CANCELLED,
    PaymentState.REFUNDED,
    PaymentState.EXPIRED,
})

_TRANSITIONS = {
    PaymentState.CREATED: (
        PaymentState.PROCESSING,
        PaymentState.CANCELLED,
        PaymentState.EXPIRED,
    ),
    PaymentState.PROCESSING: (
        PaymentState.AUTHORIZED,
        PaymentState.CAPTURED,
        PaymentState.FAILED,
    ),
    PaymentState.AUTHORIZED: (
        PaymentState.CAPTURED,
        PaymentState.PARTIALLY_CAPTURED,
        PaymentState.CANCELLED,
        PaymentState.EXPIRED,
    ),
    PaymentState.CAPTURED: (
        PaymentState.REFUNDED,
        PaymentState.PARTIALLY_REFUNDED,
        PaymentState.DISPUTED,
    ),
    PaymentState.PARTIALLY_CAPTURED: (
        PaymentState.CAPTURED,
        PaymentState.REFUNDED,
        PaymentState.PARTIALLY_REFUNDED,
    ),
    PaymentState.PARTIALLY_REFUNDED: (PaymentState.REFUNDED, PaymentState.DISPUTED),
    PaymentState.FAILED: (),
    PaymentState.CANCELLED: (),
    PaymentState.EXPIRED: (),
    PaymentState.REFUNDED: (),
    PaymentState.DISPUTED: (PaymentState.REFUNDED, PaymentState.CAPTURED),
}


class PaymentMethod(Enum):
    """Standard payment method types."""

    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    DIRECT_DEBIT = "direct_debit"
    WALLET = "wallet"
    CRYPTO = "crypto"
    BUY_NOW_PAY_LATER = "buy_now_pay_later"
    VOUCHER = "voucher"


@dataclass(frozen=True)
class OtherPaymentMethod:
    """A payment method not covered by PaymentMethod."""

    name: str


@dataclass
class PaymentStatus:
    """A payment's state together with its metadata."""

    payment_id: PaymentId
    state: PaymentState
    amount: Money
    created_at: datetime
    updated_at: datetime
    provider_id: Optional[ProviderId] = None
    provider_reference: Optional[str] = None
    metadata: Any = None