"""Checks that webhook timestamps fall inside an accepted window."""

from datetime import datetime, timezone

from ledgerkit.webhook import VerificationResult


class TimestampValidator:
    """Accepts timestamps at most ``tolerance_secs`` away from now."""

    def __init__(self, tolerance_secs: int = 300) -> None:
        if tolerance_secs < 0:
            raise ValueError("tolerance_secs must not be negative")
        self.tolerance_secs = tolerance_secs

    def validate(self, timestamp: datetime) -> VerificationResult:
        """Check a timestamp against the current time; naive values count as UTC."""
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        age = datetime.now(timezone.utc) - timestamp
        if abs(int(age.total_seconds())) > self.tolerance_secs:
            return VerificationResult.timestamp_expired(timestamp.isoformat(), self.tolerance_secs)
        return VerificationResult.valid()

    def validate_unix(self, unix_ts: int) -> VerificationResult:
        """Check a Unix timestamp in seconds."""
        try:
            moment = datetime.fromtimestamp(unix_ts, timezone.utc)
        except (OverflowError, OSError, ValueError):
            return VerificationResult.invalid(f"invalid unix timestamp: {unix_ts}")
        return self.validate(moment)