import json

import pytest

from ledgerkit.connector import AuthorizeRequest, CaptureRequest, RefundRequest
from ledgerkit.currency import Currency
from ledgerkit.events import EventKind
from ledgerkit.mock_connector import (
    AuthorizationDeclined,
    CaptureFailed,
    InvalidWebhook,
    MockConfig,
    MockConnector,
    RefundFailed,
    TransactionNotFound,
)
from ledgerkit.money import Money
from ledgerkit.payment import PaymentId, PaymentMethod, PaymentState
from ledgerkit.provider import ProviderCapability, ProviderId
from ledgerkit.webhook import RawWebhook, VerificationStatus


def _auth_request(amount=5000, currency=Currency.USD):
    return AuthorizeRequest(
        payment_id=PaymentId.generate(),
        amount=Money(amount, currency),
        payment_method=PaymentMethod.CARD,
    )


@pytest.mark.asyncio
async def test_authorize_capture_refund():
    connector = MockConnector()
    auth = await connector.authorize(_auth_request())
    assert auth.authorized_amount.amount == 5000
    assert connector.get_transaction(auth.provider_reference) is PaymentState.AUTHORIZED

    cap = await connector.capture(
        CaptureRequest(payment_id=auth.payment_id, provider_reference=auth.provider_reference)
    )
    assert cap.captured_amount.amount == 5000
    assert connector.get_transaction(auth.provider_reference) is PaymentState.CAPTURED

    ref = await connector.refund(
        RefundRequest(
            payment_id=auth.payment_id,
            provider_reference=auth.provider_reference,
            amount=Money(2000, Currency.USD),
            reason="customer request",
        )
    )
    assert ref.refunded_amount.amount == 2000
    assert ref.refund_reference.startswith("mock_refund_")
    assert connector.get_transaction(auth.provider_reference) is PaymentState.REFUNDED


@pytest.mark.asyncio
async def test_declined_authorization():
    connector = MockConnector(MockConfig(authorize_success=False))
    with pytest.raises(AuthorizationDeclined):
        await connector.authorize(_auth_request(1000, Currency.EUR))


@pytest.mark.asyncio
async def test_authorize_reference_and_raw_response():
    connector = MockConnector()
    auth = await connector.authorize(_auth_request())
    assert auth.provider_reference.startswith("mock_auth_")
    assert auth.raw_response == {"mock": True, "status": "authorized"}


@pytest.mark.asyncio
async def test_capture_failure_configured():
    connector = MockConnector(MockConfig(capture_success=False))
    auth = await connector.authorize(_auth_request())
    with pytest.raises(CaptureFailed):
        await connector.capture(
            CaptureRequest(payment_id=auth.payment_id, provider_reference=auth.provider_reference)
        )


@pytest.mark.asyncio
async def test_refund_failure_configured():
    connector = MockConnector(MockConfig(refund_success=False))
    auth = await connector.authorize(_auth_request())
    with pytest.raises(RefundFailed):
        await connector.refund(
            RefundRequest(payment_id=auth.payment_id, provider_reference=auth.provider_reference)
        )


@pytest.mark.asyncio
async def test_capture_unknown_reference():
    connector = MockConnector()
    with pytest.raises(TransactionNotFound) as info:
        await connector.capture(
            CaptureRequest(payment_id=PaymentId.generate(), provider_reference="nope")
        )
    assert info.value.provider_reference == "nope"


@pytest.mark.asyncio
async def test_refund_full_amount_by_default():
    connector = MockConnector()
    auth = await connector.authorize(_auth_request(7500, Currency.EUR))
    ref = await connector.refund(
        RefundRequest(payment_id=auth.payment_id, provider_reference=auth.provider_reference)
    )
    assert ref.refunded_amount == Money(7500, Currency.EUR)


@pytest.mark.asyncio
async def test_latency_still_succeeds():
    connector = MockConnector(MockConfig(latency_ms=1))
    auth = await connector.authorize(_auth_request())
    assert auth.authorized_amount == Money(5000, Currency.USD)


def test_get_transaction_unknown():
    assert MockConnector().get_transaction("missing") is None


def test_provider_and_capabilities():
    connector = MockConnector()
    assert connector.provider_id() == ProviderId("mock")
    caps = connector.capabilities()
    assert ProviderCapability.REFUND in caps
    assert ProviderCapability.PAYOUTS not in caps


def test_webhook_verification():
    connector = MockConnector()
    webhook = RawWebhook(
        {"x-signature": "secret"},
        '{"type":"payment.captured","payment_id":"pay_123","amount":5000}',
    )
    assert connector.verify(webhook).is_valid()


def test_webhook_verification_mismatch():
    connector = MockConnector()
    result = connector.verify(RawWebhook({"X-Signature": "wrong"}, "{}"))
    assert result.is_rejected()
    assert result.reason == "signature mismatch"


def test_webhook_verification_skipped_without_header():
    result = MockConnector().verify(RawWebhook({}, "{}"))
    assert result.status is VerificationStatus.SKIPPED
    assert result.reason == "no signature header present"


@pytest.mark.asyncio
async def test_parse_webhook():
    body = '{"type":"payment.captured","payment_id":"pay_123","amount":5000}'
    event = await MockConnector().parse_webhook(RawWebhook({}, body))
    assert event.kind is EventKind.PAYMENT_CAPTURED
    assert event.payment_id == PaymentId("pay_123")
    assert event.amount == Money(5000, Currency.USD)
    assert event.provider_id == ProviderId("mock")
    assert event.raw_payload == json.loads(body)


@pytest.mark.asyncio
async def test_parse_webhook_without_optional_fields():
    event = await MockConnector().parse_webhook(RawWebhook({}, '{"type":"payment.failed"}'))
    assert event.kind is EventKind.PAYMENT_FAILED
    assert event.payment_id is None
    assert event.amount is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    ["not json", '{"payment_id":"pay_1"}', '{"type":"payment.unknown"}', "[1, 2]"],
)
async def test_parse_webhook_rejects_bad_payloads(body):
    with pytest.raises(InvalidWebhook):
        await MockConnector().parse_webhook(RawWebhook({}, body))