"""The webhook processing pipeline: verify, deduplicate, parse."""

import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Union

from ledgerkit.events import CanonicalEvent
from ledgerkit.idempotency import IdempotencyStore
from ledgerkit.verifier import WebhookVerifier
from ledgerkit.webhook import RawWebhook, VerificationResult

logger = logging.getLogger(__name__)

_DEDUP_TTL_SECS = 86400

ParseFn = Callable[[RawWebhook], Union[CanonicalEvent, Awaitable[CanonicalEvent]]]


class ProcessorError(Exception):
    """Base class of webhook processing errors."""

    _prefix = "processing failed"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self._prefix}: {detail}")


class VerificationFailed(ProcessorError):
    _prefix = "verification failed"


class IdempotencyCheckFailed(ProcessorError):
    _prefix = "idempotency check failed"


class ParsingFailed(ProcessorError):
    _prefix = "event parsing failed"


@dataclass
class Processed:
    """A new webhook was turned into an event."""

    event: CanonicalEvent


@dataclass
class Duplicate:
    """The webhook was seen before."""

    original_id: str


@dataclass
class Rejected:
    """The webhook failed verification."""

    result: VerificationResult


ProcessResult = Union[Processed, Duplicate, Rejected]


class WebhookProcessor:
    """Verifies a webhook, detects replays and parses it into a canonical event."""

    def __init__(
        self,
        verifier: WebhookVerifier,
        store: IdempotencyStore,
        timestamp_tolerance_secs: int = 300,
    ) -> None:
        self.verifier = verifier
        self.store = store
        self.timestamp_tolerance_secs = timestamp_tolerance_secs

    async def process(self, webhook: RawWebhook, parse_fn: ParseFn) -> ProcessResult:
        """Run the webhook through the pipeline; parse_fn may be sync or async."""
        try:
            verification = self.verifier.verify(webhook)
        except Exception as exc:
            raise VerificationFailed(str(exc)) from exc

        if verification.is_rejected():
            logger.warning("webhook %s rejected: %r", webhook.id, verification)
            return Rejected(verification)

        key = f"webhook:{webhook.id}"
        try:
            existing = await self.store.try_acquire(key, _DEDUP_TTL_SECS)
        except Exception as exc:
            raise IdempotencyCheckFailed(str(exc)) from exc
        if existing is not None:
            logger.info("duplicate webhook %s detected", webhook.id)
            return Duplicate(existing.key)

        try:
            event = parse_fn(webhook)
            if inspect.isawaitable(event):
                event = await event
        except Exception as exc:
            raise ParsingFailed(str(exc)) from exc

        try:
            await self.store.complete(key, {"event_id": event.event_id})
        except Exception:
            logger.warning("could not mark webhook %s as processed", webhook.id)

        logger.info(
            "webhook %s processed successfully: event %s (%s)",
            webhook.id,
            event.event_id,
            event.kind,
        )
        return Processed(event)