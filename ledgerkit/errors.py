"""Error types for ledgerkit operations."""

from enum import Enum
from typing import Optional

from ledgerkit.payment import PaymentState


class ErrorCategory(Enum):
    """Categories of provider and payment errors, for consistent handling."""

    AUTHENTICATION = "authentication"
    INVALID_REQUEST = "invalid_request"
    DECLINED = "declined"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    CARD_EXPIRED = "card_expired"
    FRAUD_SUSPECTED = "fraud_suspected"
    RATE_LIMITED = "rate_limited"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    NETWORK_ERROR = "network_error"
    UNEXPECTED_RESPONSE = "unexpected_response"
    TIMEOUT = "timeout"
    IDEMPOTENCY_CONFLICT = "idempotency_conflict"
    PROCESSING_ERROR = "processing_error"
    UNKNOWN = "unknown"

    def is_retryable(self) -> bool:
        """Whether errors of this category are generally worth retrying."""
        return self in _RETRYABLE_CATEGORIES

    def __str__(self) -> str:
        return self.value


_RETRYABLE_CATEGORIES = frozenset({
    ErrorCategory.RATE_LIMITED,
    ErrorCategory.PROVIDER_UNAVAILABLE,
    ErrorCategory.NETWORK_ERROR,
    ErrorCategory.TIMEOUT,
})


def _state_name(state: PaymentState) -> str:
    return "".join(part.capitalize() for part in state.name.split("_"))


class LedgerError(Exception):
    """Base class of all ledgerkit errors."""

    def is_retryable(self) -> bool:
        """Whether the failed operation may succeed if tried again."""
        return False


class _PrefixedError(LedgerError):
    _prefix = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self._prefix}: {message}")


class ProviderError(LedgerError):
    """A payment provider reported an error."""

    def __init__(
        self,
        category: ErrorCategory,
        message: str,
        provider_code: Optional[str] = None,
        retryable: Optional[bool] = None,
    ) -> None:
        self.category = category
        self.message = message
        self.provider_code = provider_code
        self.retryable = category.is_retryable() if retryable is None else retryable
        super().__init__(f"provider error: {category} - {message}")

    def is_retryable(self) -> bool:
        return self.retryable


class WebhookError(_PrefixedError):
    """A webhook could not be handled."""

    _prefix = "webhook error"


class InvalidStateTransition(LedgerError):
    """A payment was asked to move to a state it cannot reach."""

    def __init__(self, from_state: PaymentState, to_state: PaymentState) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"invalid state transition from {_state_name(from_state)} "
            f"to {_state_name(to_state)}"
        )


class ValidationError(_PrefixedError):
    """Input failed validation."""

    _prefix = "validation error"


class SerializationError(_PrefixedError):
    """Data could not be serialised or deserialised."""

    _prefix = "serialization error"


class ConfigurationError(_PrefixedError):
    """The configuration is invalid."""

    _prefix = "configuration error"


class OperationTimeout(LedgerError):
    """An operation did not finish in time."""

    def __init__(self, duration_ms: int) -> None:
        self.duration_ms = duration_ms
        super().__init__(f"timeout after {duration_ms}ms")

    def is_retryable(self) -> bool:
        return True


class NotFoundError(LedgerError):
    """An entity could not be found."""

    def __init__(self, entity: str, id: str) -> None:
        self.entity = entity
        self.id = id
        super().__init__(f"not found: {entity} {id}")


class IdempotencyConflict(LedgerError):
    """An idempotency key is already in use."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"idempotency conflict: key={key}")


class InternalError(_PrefixedError):
    """An unexpected internal failure."""

    _prefix = "internal error"

    def is_retryable(self) -> bool:
        return True