"""
Session store — the authoritative in-memory session registry.

Three maps are kept in lock-step behind one re-entrant lock:
- session_id → SessionRecord (primary)
- user_id → {session_id} (per-user index; empty sets are dropped)
- sha256(refresh_token) → session_id (refresh lookup)

Every mutating method takes the lock itself.  Callers that need a
compound operation to be atomic (limit-then-insert) hold ``store.lock``
across the calls; the lock is re-entrant so nested acquisition is fine.
"""

import hmac
import logging
import threading
from datetime import datetime

from authsession.core.exceptions import DuplicateSessionId
from authsession.core.security import hash_token
from authsession.models.session import SessionRecord, SessionStats

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._sessions: dict[str, SessionRecord] = {}
        self._user_sessions: dict[str, set[str]] = {}
        self._refresh_index: dict[str, str] = {}

    def __len__(self) -> int:
        with self.lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self.lock:
            return session_id in self._sessions

    # ── Mutations ────────────────────────────────────────────────────

    def insert(self, record: SessionRecord) -> None:
        with self.lock:
            if record.session_id in self._sessions:
                raise DuplicateSessionId(record.session_id)
            self._sessions[record.session_id] = record
            self._user_sessions.setdefault(record.user_id, set()).add(record.session_id)
            self._refresh_index[hash_token(record.refresh_token)] = record.session_id

    def remove(self, session_id: str) -> bool:
        """Drop a session from every index.  Returns False if it was not there."""
        with self.lock:
            record = self._sessions.pop(session_id, None)
            if record is None:
                return False

            user_set = self._user_sessions.get(record.user_id)
            if user_set is not None:
                user_set.discard(session_id)
                if not user_set:
                    del self._user_sessions[record.user_id]

            token_key = hash_token(record.refresh_token)
            if self._refresh_index.get(token_key) == session_id:
                del self._refresh_index[token_key]
            return True

    def touch(self, session_id: str, now: datetime) -> SessionRecord | None:
        """Stamp ``last_activity``; returns the live record or None."""
        with self.lock:
            record = self._sessions.get(session_id)
            if record is not None:
                record.last_activity = now
            return record

    # ── Lookups ──────────────────────────────────────────────────────

    def get(self, session_id: str) -> SessionRecord | None:
        with self.lock:
            return self._sessions.get(session_id)

    def find_by_refresh_token(self, refresh_token: str) -> SessionRecord | None:
        if not refresh_token:
            return None
        try:
            digest = hash_token(refresh_token)
        except UnicodeEncodeError:
            return None
        with self.lock:
            session_id = self._refresh_index.get(digest)
            if session_id is None:
                return None
            record = self._sessions.get(session_id)
        if record is None or not hmac.compare_digest(record.refresh_token, refresh_token):
            return None
        return record

    def list_by_user(self, user_id: str, now: datetime) -> list[SessionRecord]:
        """Live sessions for a user.  Stale records are skipped, not removed."""
        with self.lock:
            ids = self._user_sessions.get(user_id, ())
            records = (self._sessions.get(sid) for sid in ids)
            return [r for r in records if r is not None and r.is_live(now)]

    def session_ids_for_user(self, user_id: str) -> list[str]:
        with self.lock:
            return list(self._user_sessions.get(user_id, ()))

    def expired_ids(self, now: datetime) -> list[str]:
        with self.lock:
            return [sid for sid, r in self._sessions.items() if not r.is_live(now)]

    def stats(self, now: datetime) -> SessionStats:
        with self.lock:
            expired = sum(1 for r in self._sessions.values() if not r.is_live(now))
            return SessionStats(
                total_sessions=len(self._sessions),
                active_users=len(self._user_sessions),
                expired_sessions=expired,
            )
