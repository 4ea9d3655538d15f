"""
Time sources.

Everything that reads the time (token expiry, session expiry, eviction
ordering, sweeps) takes a clock instead of calling ``datetime.now``
directly, so tests can drive time by hand.
"""

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, always timezone-aware UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
