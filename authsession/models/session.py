"""
Session records — the in-memory session registry's row types.

Tracks active login sessions per user, enabling:
- Per-user concurrency limits with least-recently-active eviction
- Server-side session invalidation & force logout
- Access-token re-issue from a long-lived refresh token

Identity claims are copied from the authenticating principal at
creation time and never change afterwards.  Only ``last_activity``
is mutated during a session's life.
"""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass
class SessionRecord:
    session_id: str
    user_id: str
    email: str
    role: str
    created_at: datetime
    last_activity: datetime
    expires_at: datetime
    refresh_token: str
    device_info: str | None = None
    ip_address: str | None = None

    def is_live(self, now: datetime) -> bool:
        return now <= self.expires_at

    def snapshot(self) -> "SessionRecord":
        """Detached copy handed to callers so they cannot mutate the store."""
        return replace(self)

    def __repr__(self) -> str:
        return f"<SessionRecord id={self.session_id} user={self.user_id} role={self.role}>"


# Callers see the same shape; the alias names the read-only role.
SessionData = SessionRecord


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class SessionStats:
    total_sessions: int
    active_users: int
    expired_sessions: int
