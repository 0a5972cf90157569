"""Retry policy with exponential backoff."""

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Union

_MILLISECOND = timedelta(milliseconds=1)


@dataclass(frozen=True)
class Retry:
    """Retry after ``delay``; ``attempt`` is the number of the next attempt."""

    delay: timedelta
    attempt: int


@dataclass(frozen=True)
class GiveUp:
    """Stop retrying."""

    attempts_made: int
    reason: str


RetryDecision = Union[Retry, GiveUp]


@dataclass
class RetryPolicy:
    """How many times to retry and how long to wait in between."""

    max_retries: int = 3
    initial_delay: timedelta = timedelta(milliseconds=200)
    max_delay: timedelta = timedelta(seconds=30)
    backoff_factor: float = 2.0
    jitter: bool = True

    @classmethod
    def no_retries(cls) -> "RetryPolicy":
        return cls(max_retries=0)

    def evaluate(self, attempt: int) -> RetryDecision:
        """Decide whether attempt number ``attempt`` (from 0) should be retried."""
        if attempt < 0:
            raise ValueError("attempt must not be negative")
        if attempt >= self.max_retries:
            return GiveUp(attempt, f"max retries ({self.max_retries}) exhausted")

        initial_ms = self.initial_delay // _MILLISECOND
        max_ms = self.max_delay // _MILLISECOND
        try:
            delay_ms = initial_ms * float(self.backoff_factor) ** attempt
        except OverflowError:
            delay_ms = math.inf
        if delay_ms > max_ms:
            delay_ms = float(max_ms)

        if self.jitter:
            # Deterministic jitter between 50% and 100% of the computed delay.
            delay_ms *= 0.5 + ((attempt * 7.0) % 10.0) / 20.0

        if math.isnan(delay_ms) or delay_ms <= 0:
            whole_ms = 0
        else:
            whole_ms = int(delay_ms)
        return Retry(timedelta(milliseconds=whole_ms), attempt + 1)