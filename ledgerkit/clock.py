"""Time sources that can be swapped out in tests."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """A source of the current UTC time."""

    @abstractmethod
    def now(self) -> datetime:
        """The current UTC timestamp."""


class SystemClock(Clock):
    """The real system clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class MockClock(Clock):
    """A clock whose time is set and advanced by hand."""

    def __init__(self, time: datetime) -> None:
        self._lock = threading.Lock()
        self._now = time

    def advance(self, delta: timedelta) -> None:
        with self._lock:
            self._now = self._now + delta

    def set(self, time: datetime) -> None:
        with self._lock:
            self._now = time

    def now(self) -> datetime:
        with self._lock:
            return self._now