"""An in-memory payment connector for tests and local development."""

import asyncio
import json
import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ledgerkit.connector import (
    AuthorizeRequest,
    AuthorizeResponse,
    CaptureRequest,
    CaptureResponse,
    PaymentConnector,
    RefundRequest,
    RefundResponse,
)
from ledgerkit.currency import Currency
from ledgerkit.events import CanonicalEvent, EventKind
from ledgerkit.money import Money
from ledgerkit.payment import PaymentId, PaymentState
from ledgerkit.provider import ProviderCapability, ProviderId
from ledgerkit.verifier import WebhookVerifier
from ledgerkit.webhook import RawWebhook, VerificationResult

SIGNATURE_HEADER = "x-signature"

_PROVIDER = ProviderId("mock")

_CAPABILITIES: Tuple[ProviderCapability, ...] = (
    ProviderCapability.AUTH_CAPTURE,
    ProviderCapability.DIRECT_CAPTURE,
    ProviderCapability.REFUND,
    ProviderCapability.PARTIAL_REFUND,
    ProviderCapability.VOID,
    ProviderCapability.WEBHOOKS,
)

_WEBHOOK_KINDS = {
    "payment.authorized": EventKind.PAYMENT_AUTHORIZED,
    "payment.captured": EventKind.PAYMENT_CAPTURED,
    "payment.failed": EventKind.PAYMENT_FAILED,
    "payment.refunded": EventKind.PAYMENT_REFUNDED,
}


@dataclass
class MockConfig:
    """How the mock connector behaves."""

    authorize_success: bool = True
    capture_success: bool = True
    refund_success: bool = True
    latency_ms: int = 0
    webhook_secret: str = "secret"


class MockConnectorError(Exception):
    """Base class of errors raised by the mock connector."""


class AuthorizationDeclined(MockConnectorError):
    def __init__(self) -> None:
        super().__init__("mock authorization declined")


class CaptureFailed(MockConnectorError):
    def __init__(self) -> None:
        super().__init__("mock capture failed")


class RefundFailed(MockConnectorError):
    def __init__(self) -> None:
        super().__init__("mock refund failed")


class TransactionNotFound(MockConnectorError):
    def __init__(self, provider_reference: str) -> None:
        self.provider_reference = provider_reference
        super().__init__(f"transaction not found: {provider_reference}")


class InvalidWebhook(MockConnectorError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"invalid webhook payload: {detail}")


@dataclass
class _MockTransaction:
    payment_id: PaymentId
    provider_ref: str
    amount: Money
    state: PaymentState


class MockConnector(PaymentConnector, WebhookVerifier):
    """Simulates a payment provider entirely in memory."""

    def __init__(self, config: Optional[MockConfig] = None) -> None:
        self.config = config if config is not None else MockConfig()
        self._transactions: Dict[str, _MockTransaction] = {}
        self._lock = threading.Lock()

    def get_transaction(self, provider_ref: str) -> Optional[PaymentState]:
        """The current state of a transaction, or None if unknown."""
        with self._lock:
            txn = self._transactions.get(provider_ref)
            return None if txn is None else txn.state

    def provider_id(self) -> ProviderId:
        return _PROVIDER

    def capabilities(self) -> Tuple[ProviderCapability, ...]:
        return _CAPABILITIES

    async def _simulate_latency(self) -> None:
        if self.config.latency_ms > 0:
            await asyncio.sleep(self.config.latency_ms / 1000)

    async def authorize(self, req: AuthorizeRequest) -> AuthorizeResponse:
        await self._simulate_latency()
        if not self.config.authorize_success:
            raise AuthorizationDeclined()

        provider_ref = f"mock_auth_{uuid.uuid4()}"
        with self._lock:
            self._transactions[provider_ref] = _MockTransaction(
                payment_id=req.payment_id,
                provider_ref=provider_ref,
                amount=req.amount,
                state=PaymentState.AUTHORIZED,
            )
        return AuthorizeResponse(
            payment_id=req.payment_id,
            provider_reference=provider_ref,
            authorized_amount=req.amount,
            raw_response={"mock": True, "status": "authorized"},
        )

    def _update(self, provider_ref: str, requested: Optional[Money], state: PaymentState) -> Money:
        with self._lock:
            txn = self._transactions.get(provider_ref)
            if txn is None:
                raise TransactionNotFound(provider_ref)
            txn.state = state
            return requested if requested is not None else txn.amount

    async def capture(self, req: CaptureRequest) -> CaptureResponse:
        await self._simulate_latency()
        if not self.config.capture_success:
            raise CaptureFailed()
        captured = self._update(req.provider_reference, req.amount, PaymentState.CAPTURED)
        return CaptureResponse(
            payment_id=req.payment_id,
            provider_reference=req.provider_reference,
            captured_amount=captured,
            raw_response={"mock": True, "status": "captured"},
        )

    async def refund(self, req: RefundRequest) -> RefundResponse:
        await self._simulate_latency()
        if not self.config.refund_success:
            raise RefundFailed()
        refunded = self._update(req.provider_reference, req.amount, PaymentState.REFUNDED)
        return RefundResponse(
            payment_id=req.payment_id,
            provider_reference=req.provider_reference,
            refund_reference=f"mock_refund_{uuid.uuid4()}",
            refunded_amount=refunded,
            raw_response={"mock": True, "status": "refunded"},
        )

    async def parse_webhook(self, webhook: RawWebhook) -> CanonicalEvent:
        try:
            payload = json.loads(webhook.body)
        except ValueError as exc:
            raise InvalidWebhook(str(exc)) from exc

        fields = payload if isinstance(payload, dict) else {}
        event_type = fields.get("type")
        if not isinstance(event_type, str):
            raise InvalidWebhook("missing 'type' field")
        kind = _WEBHOOK_KINDS.get(event_type)
        if kind is None:
            raise InvalidWebhook(f"unknown event type: {event_type}")

        raw_payment_id = fields.get("payment_id")
        payment_id = PaymentId(raw_payment_id) if isinstance(raw_payment_id, str) else None

        raw_amount = fields.get("amount")
        amount = None
        if isinstance(raw_amount, int) and not isinstance(raw_amount, bool):
            amount = Money(raw_amount, Currency.USD)

        return CanonicalEvent(
            kind,
            payment_id=payment_id,
            provider_id=_PROVIDER,
            amount=amount,
            raw_payload=payload,
        )

    def verify(self, webhook: RawWebhook) -> VerificationResult:
        """Compare the x-signature header with the configured secret."""
        signature = webhook.header(SIGNATURE_HEADER)
        if signature is None:
            return VerificationResult.skipped("no signature header present")
        if signature == self.config.webhook_secret:
            return VerificationResult.valid()
        return VerificationResult.invalid("signature mismatch")