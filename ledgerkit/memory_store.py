"""In-memory storage for development and testing."""

import copy
import threading
from datetime import timedelta
from typing import Any, Dict, List, Optional

from ledgerkit.clock import Clock, SystemClock
from ledgerkit.events import CanonicalEvent
from ledgerkit.idempotency import IdempotencyRecord, IdempotencyStatus, IdempotencyStore


class InMemoryIdempotencyStore(IdempotencyStore):
    """Idempotency records kept in a dictionary."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock if clock is not None else SystemClock()
        self._records: Dict[str, IdempotencyRecord] = {}
        self._lock = threading.Lock()

    async def try_acquire(self, key: str, ttl_secs: int) -> Optional[IdempotencyRecord]:
        if ttl_secs < 0:
            raise ValueError("ttl_secs must not be negative")
        with self._lock:
            now = self._clock.now()
            existing = self._records.get(key)
            if existing is not None:
                if existing.expires_at >= now:
                    return copy.deepcopy(existing)
                del self._records[key]
            self._records[key] = IdempotencyRecord(
                key=key,
                created_at=now,
                expires_at=now + timedelta(seconds=ttl_secs),
                response=None,
                status=IdempotencyStatus.IN_PROGRESS,
            )
            return None

    async def complete(self, key: str, response: Any) -> None:
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                record.status = IdempotencyStatus.COMPLETED
                record.response = response

    async def fail(self, key: str) -> None:
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                record.status = IdempotencyStatus.FAILED

    async def get(self, key: str) -> Optional[IdempotencyRecord]:
        with self._lock:
            record = self._records.get(key)
            return None if record is None else copy.deepcopy(record)

    async def remove(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)


class InMemoryEventStore:
    """Canonical events kept in a list, in the order stored."""

    def __init__(self) -> None:
        self._events: List[CanonicalEvent] = []
        self._lock = threading.Lock()

    def store(self, event: CanonicalEvent) -> None:
        with self._lock:
            self._events.append(event)

    def all(self) -> List[CanonicalEvent]:
        """A copy of every stored event."""
        with self._lock:
            return list(self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()