import base64

import pytest

from ledgerkit.hmac_verifier import (
    HmacVerifier,
    HmacVerifierConfig,
    InvalidSignatureEncoding,
    MissingSignatureHeader,
    SignatureEncoding,
)
from ledgerkit.webhook import RawWebhook

HEADER = "x-webhook-signature"


def test_hmac_sign_and_verify():
    verifier = HmacVerifier.hex(b"secret", HEADER)
    body = '{"event":"payment.captured"}'
    signature = verifier.sign_hex(body.encode())
    webhook = RawWebhook({HEADER: signature}, body)
    assert verifier.verify(webhook).is_valid()


def test_hmac_invalid_signature():
    verifier = HmacVerifier.hex(b"secret", HEADER)
    webhook = RawWebhook({HEADER: "deadbeef"}, "test body")
    assert verifier.verify(webhook).is_rejected()


def test_hmac_missing_header():
    verifier = HmacVerifier.hex(b"secret", HEADER)
    webhook = RawWebhook({}, "test body")
    with pytest.raises(MissingSignatureHeader) as info:
        verifier.verify(webhook)
    assert info.value.header == HEADER


def test_header_lookup_ignores_case():
    verifier = HmacVerifier.hex(b"secret", HEADER)
    body = "payload"
    webhook = RawWebhook({HEADER.upper(): verifier.sign_hex(body)}, body)
    assert verifier.verify(webhook).is_valid()


def test_non_hex_signature_raises():
    verifier = HmacVerifier.hex(b"secret", HEADER)
    webhook = RawWebhook({HEADER: "not hex at all"}, "body")
    with pytest.raises(InvalidSignatureEncoding):
        verifier.verify(webhook)


def test_tampered_body_is_rejected():
    verifier = HmacVerifier.hex(b"secret", HEADER)
    webhook = RawWebhook({HEADER: verifier.sign_hex("original")}, "tampered")
    result = verifier.verify(webhook)
    assert result.is_rejected()
    assert result.reason == "HMAC signature mismatch"


def test_signature_prefix_is_stripped():
    config = HmacVerifierConfig(secret=b"secret", signature_header=HEADER, signature_prefix="sha256=")
    verifier = HmacVerifier(config)
    body = "data"
    webhook = RawWebhook({HEADER: "sha256=" + verifier.sign_hex(body)}, body)
    assert verifier.verify(webhook).is_valid()


def test_base64_signature():
    config = HmacVerifierConfig(
        secret=b"secret", signature_header=HEADER, encoding=SignatureEncoding.BASE64
    )
    verifier = HmacVerifier(config)
    body = "data"
    encoded = base64.b64encode(verifier.compute_signature(body)).decode()
    webhook = RawWebhook({HEADER: encoded}, body)
    assert verifier.verify(webhook).is_valid()


def test_sign_hex_matches_digest():
    verifier = HmacVerifier.hex(b"secret", HEADER)
    digest = verifier.compute_signature(b"abc")
    assert len(digest) == 32
    assert verifier.sign_hex(b"abc") == digest.hex()


def test_different_secrets_give_different_signatures():
    first = HmacVerifier.hex(b"secret", HEADER)
    second = HmacVerifier.hex(b"token", HEADER)
    assert first.sign_hex("body") != second.sign_hex("body")
    webhook = RawWebhook({HEADER: second.sign_hex("body")}, "body")
    assert first.verify(webhook).is_rejected()