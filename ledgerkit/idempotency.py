"""Idempotency records and the storage interface that keeps them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class IdempotencyStatus(Enum):
    """Progress of an idempotent operation."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class IdempotencyRecord:
    """A stored idempotency key and what became of its operation."""

    key: str
    created_at: datetime
    expires_at: datetime
    response: Any = None
    status: IdempotencyStatus = IdempotencyStatus.IN_PROGRESS


class IdempotencyStore(ABC):
    """Storage for idempotency keys, so retried requests do not charge twice."""

    @abstractmethod
    async def try_acquire(self, key: str, ttl_secs: int) -> Optional[IdempotencyRecord]:
        """Claim a key: None if it was new, else the existing record."""

    @abstractmethod
    async def complete(self, key: str, response: Any) -> None:
        """Mark the operation as completed with its response."""

    @abstractmethod
    async def fail(self, key: str) -> None:
        """Mark the operation as failed."""

    @abstractmethod
    async def get(self, key: str) -> Optional[IdempotencyRecord]:
        """The record for a key, if any."""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Forget a key."""