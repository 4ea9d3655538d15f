"""
Per-user concurrent session cap.

Called right before a new session is inserted.  If the user already
holds ``max_sessions_per_user`` live sessions, the least recently
active ones are evicted until exactly one slot is free. The newest
login always wins.  Ties on ``last_activity`` fall back to session id
so eviction order is reproducible.

Expired-but-unswept sessions are not counted; the sweeper reclaims
them.
"""

import logging
from datetime import datetime

from authsession.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionLimiter:
    def __init__(self, store: SessionStore, max_sessions_per_user: int):
        if max_sessions_per_user < 1:
            raise ValueError("max_sessions_per_user must be at least 1")
        self._store = store
        self.max_sessions_per_user = max_sessions_per_user

    def enforce_limit(self, user_id: str, now: datetime) -> list[str]:
        """Evict oldest-activity sessions to leave one free slot.

        Returns the evicted session ids, oldest first.  Callers must
        hold ``store.lock`` across this call and the following insert.
        """
        with self._store.lock:
            live = self._store.list_by_user(user_id, now)
            overflow = len(live) - self.max_sessions_per_user + 1
            if overflow <= 0:
                return []

            live.sort(key=lambda r: (r.last_activity, r.session_id))
            evicted: list[str] = []
            for record in live[:overflow]:
                if self._store.remove(record.session_id):
                    evicted.append(record.session_id)

        logger.info(
            "Session limit reached for user %s, evicted %d session(s)",
            user_id,
            len(evicted),
        )
        return evicted
