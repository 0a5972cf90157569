"""Interface for verifying webhook signatures."""

from abc import ABC, abstractmethod

from ledgerkit.webhook import RawWebhook, VerificationResult


class WebhookVerifier(ABC):
    """Checks the authenticity of incoming webhooks for one provider."""

    @abstractmethod
    def verify(self, webhook: RawWebhook) -> VerificationResult:
        """Verify signature, timestamp and any provider-specific rules."""