"""Raw webhook deliveries and verification results."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional


@dataclass(frozen=True)
class WebhookId:
    """Our identifier for a webhook delivery."""

    value: str

    @classmethod
    def generate(cls) -> "WebhookId":
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RawWebhook:
    """An incoming webhook before verification."""

    headers: Dict[str, str]
    body: str
    id: WebhookId = field(default_factory=WebhookId.generate)
    received_at: datetime = field(default_factory=_utc_now)
    source_ip: Optional[str] = None

    def header(self, name: str) -> Optional[str]:
        """Look up a header value, ignoring case."""
        lower = name.lower()
        return next(
            (value for key, value in self.headers.items() if key.lower() == lower),
            None,
        )


class VerificationStatus(Enum):
    VALID = "valid"
    INVALID = "invalid"
    TIMESTAMP_EXPIRED = "timestamp_expired"
    DUPLICATE = "duplicate"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of webhook signature verification."""

    status: VerificationStatus
    reason: Optional[str] = None
    received: Optional[str] = None
    tolerance_secs: Optional[int] = None
    original_id: Optional[str] = None

    @classmethod
    def valid(cls) -> "VerificationResult":
        return cls(VerificationStatus.VALID)

    @classmethod
    def invalid(cls, reason: str) -> "VerificationResult":
        return cls(VerificationStatus.INVALID, reason=reason)

    @classmethod
    def timestamp_expired(cls, received: str, tolerance_secs: int) -> "VerificationResult":
        return cls(
            VerificationStatus.TIMESTAMP_EXPIRED,
            received=received,
            tolerance_secs=tolerance_secs,
        )

    @classmethod
    def duplicate(cls, original_id: str) -> "VerificationResult":
        return cls(VerificationStatus.DUPLICATE, original_id=original_id)

    @classmethod
    def skipped(cls, reason: str) -> "VerificationResult":
        return cls(VerificationStatus.SKIPPED, reason=reason)

    def is_valid(self) -> bool:
        return self.status is VerificationStatus.VALID

    def is_rejected(self) -> bool:
        return self.status in (VerificationStatus.INVALID, VerificationStatus.TIMESTAMP_EXPIRED)