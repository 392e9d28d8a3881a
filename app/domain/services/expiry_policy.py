"""Expiry policy - time-bounded validity windows for mailed tokens."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ExpiryPolicy:
    """
    Compute and check expiry timestamps.

    The clock is injectable so callers (and tests) control what "now" means.
    A missing expiry is always treated as expired: absence of a validity
    window never means unlimited validity.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or utc_now

    def now(self) -> datetime:
        return self._as_utc(self._clock())

    def expiry_time(self, hours: float) -> datetime:
        """Return now + hours."""
        return self.now() + timedelta(hours=hours)

    def is_expired(self, expires_at: datetime | None) -> bool:
        """Return True if expires_at is None or lies in the past."""
        if expires_at is None:
            return True
        return self.now() > self._as_utc(expires_at)

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # Some stores (SQLite) hand back naive datetimes; they are stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
