"""HMAC-SHA256 webhook signature verification."""

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ledgerkit.verifier import WebhookVerifier
from ledgerkit.webhook import RawWebhook, VerificationResult

BytesLike = Union[bytes, bytearray, memoryview, str]


class SignatureEncoding(Enum):
    """How a signature is encoded in its header."""

    HEX = "hex"
    BASE64 = "base64"


@dataclass
class HmacVerifierConfig:
    """Settings for HMAC-SHA256 verification."""

    secret: bytes
    signature_header: str
    timestamp_header: Optional[str] = None
    encoding: SignatureEncoding = SignatureEncoding.HEX
    signature_prefix: Optional[str] = None


class HmacVerifierError(Exception):
    """Base class of HMAC verification errors."""


class MissingSignatureHeader(HmacVerifierError):
    def __init__(self, header: str) -> None:
        self.header = header
        super().__init__(f"missing signature header: {header}")


class InvalidSignatureEncoding(HmacVerifierError):
    def __init__(self) -> None:
        super().__init__("invalid signature encoding")


def _as_bytes(data: BytesLike) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


class HmacVerifier(WebhookVerifier):
    """Verifies webhooks signed with HMAC-SHA256 over the raw body."""

    def __init__(self, config: HmacVerifierConfig) -> None:
        self.config = config

    @classmethod
    def hex(cls, secret: BytesLike, signature_header: str) -> "HmacVerifier":
        """A verifier for hex-encoded signatures in the given header."""
        return cls(HmacVerifierConfig(secret=_as_bytes(secret), signature_header=signature_header))

    def compute_signature(self, payload: BytesLike) -> bytes:
        """The raw HMAC-SHA256 digest of a payload."""
        return hmac.new(_as_bytes(self.config.secret), _as_bytes(payload), hashlib.sha256).digest()

    def sign_hex(self, payload: BytesLike) -> str:
        """The hex-encoded HMAC-SHA256 digest of a payload."""
        return self.compute_signature(payload).hex()

    def _extract_signature(self, raw: str) -> str:
        prefix = self.config.signature_prefix
        return raw.removeprefix(prefix) if prefix else raw

    def _decode_signature(self, encoded: str) -> bytes:
        try:
            if self.config.encoding is SignatureEncoding.HEX:
                return binascii.unhexlify(encoded)
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidSignatureEncoding() from None

    def verify(self, webhook: RawWebhook) -> VerificationResult:
        header = webhook.header(self.config.signature_header)
        if header is None:
            raise MissingSignatureHeader(self.config.signature_header)
        expected = self._decode_signature(self._extract_signature(header))
        actual = self.compute_signature(webhook.body)
        if hmac.compare_digest(actual, expected):
            return VerificationResult.valid()
        return VerificationResult.invalid("HMAC signature mismatch")