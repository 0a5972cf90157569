"""Requests, responses and the interface every payment connector provides."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from ledgerkit.events import CanonicalEvent
from ledgerkit.money import Money
from ledgerkit.payment import OtherPaymentMethod, PaymentId, PaymentMethod
from ledgerkit.provider import ProviderCapability, ProviderId
from ledgerkit.webhook import RawWebhook


@dataclass
class AuthorizeRequest:
    """Request to authorise (reserve funds for) a payment."""

    payment_id: PaymentId
    amount: Money
    payment_method: Union[PaymentMethod, OtherPaymentMethod]
    idempotency_key: Optional[str] = None
    metadata: Any = None


@dataclass
class AuthorizeResponse:
    payment_id: PaymentId
    provider_reference: str
    authorized_amount: Money
    raw_response: Any = None


@dataclass
class CaptureRequest:
    """Request to capture an authorised payment; no amount means the full amount."""

    payment_id: PaymentId
    provider_reference: str
    amount: Optional[Money] = None
    idempotency_key: Optional[str] = None


@dataclass
class CaptureResponse:
    payment_id: PaymentId
    provider_reference: str
    captured_amount: Money
    raw_response: Any = None


@dataclass
class RefundRequest:
    """Request to refund a payment; no amount means the full amount."""

    payment_id: PaymentId
    provider_reference: str
    amount: Optional[Money] = None
    reason: Optional[str] = None
    idempotency_key: Optional[str] = None


@dataclass
class RefundResponse:
    payment_id: PaymentId
    provider_reference: str
    refund_reference: str
    refunded_amount: Money
    raw_response: Any = None


class PaymentConnector(ABC):
    """A payment provider integration: authorise, capture, refund and parse webhooks."""

    @abstractmethod
    def provider_id(self) -> ProviderId:
        """The provider this connector talks to."""

    @abstractmethod
    def capabilities(self) -> Sequence[ProviderCapability]:
        """The features the provider supports."""

    @abstractmethod
    async def authorize(self, req: AuthorizeRequest) -> AuthorizeResponse:
        """Reserve funds for a payment."""

    @abstractmethod
    async def capture(self, req: CaptureRequest) -> CaptureResponse:
        """Transfer the funds of an authorised payment."""

    @abstractmethod
    async def refund(self, req: RefundRequest) -> RefundResponse:
        """Return funds of a captured payment."""

    @abstractmethod
    async def parse_webhook(self, webhook: RawWebhook) -> CanonicalEvent:
        """Turn a raw provider webhook into a canonical event."""