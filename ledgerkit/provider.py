"""Payment provider identifiers and capabilities."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ProviderId:
    """Unique identifier for a payment provider."""

    value: str

    def __str__(self) -> str:
        return self.value


class ProviderCapability(Enum):
    """Features a payment provider may support."""

    AUTH_CAPTURE = "auth_capture"
    DIRECT_CAPTURE = "direct_capture"
    PARTIAL_CAPTURE = "partial_capture"
    REFUND = "refund"
    PARTIAL_REFUND = "partial_refund"
    VOID = "void"
    WEBHOOKS = "webhooks"
    THREE_D_SECURE = "three_d_secure"
    RECURRING = "recurring"
    PAYOUTS = "payouts"
    TOKENIZATION = "tokenization"
    MULTI_CURRENCY = "multi_currency"