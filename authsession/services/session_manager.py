"""
Session manager — the public face of the session layer.

Handles:
- Session creation with per-user limit enforcement
- Access-token validation (the per-request hot path)
- Access-token re-issue from a refresh token
- Single-session and log-out-everywhere revocation
- Session listing and store statistics
- Starting / stopping the background expiry sweep

Failure rules:
- Bad tokens, unknown ids / refresh tokens and expired sessions all
  come back as ``None`` / ``False``.  The reason is logged at DEBUG
  and never returned, so callers cannot probe for live sessions.
- An expired session found on the way is destroyed immediately,
  whether or not the sweeper has reached it yet.
- ``DuplicateSessionId`` is a bug and propagates.

Refresh tokens are NOT rotated: the same refresh token keeps working
until the session's absolute expiry or an explicit destroy.
"""

import logging

from authsession.core.clock import Clock, SystemClock
from authsession.core.config import Settings
from authsession.core.exceptions import (
    DuplicateSessionId,
    NotAuthenticated,
    SessionExpired,
    SessionNotFound,
)
from authsession.core.security import (
    AccessClaims,
    TokenCodec,
    generate_refresh_token,
    generate_session_id,
)
from authsession.models.session import SessionData, SessionRecord, SessionStats, TokenPair
from authsession.services.expiry_sweeper import ExpirySweeper
from authsession.services.session_limiter import SessionLimiter
from authsession.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionManager:
    """Composes codec, store, limiter and sweeper behind one API."""

    def __init__(
        self,
        settings: Settings,
        clock: Clock | None = None,
        codec: TokenCodec | None = None,
    ):
        self.settings = settings
        self.clock = clock or SystemClock()
        self.codec = codec or TokenCodec(
            settings.SECRET_KEY,
            self.clock,
            algorithm=settings.JWT_ALGORITHM,
            access_lifetime=settings.access_token_lifetime,
        )
        self.store = SessionStore()
        self.limiter = SessionLimiter(self.store, settings.MAX_SESSIONS_PER_USER)
        self.sweeper = ExpirySweeper(self.store, self.clock, settings.sweep_interval)

    # ── Lifecycle ────────────────────────────────────────────────────

    async def start(self) -> None:
        await self.sweeper.start()

    async def shutdown(self) -> None:
        await self.sweeper.stop()

    def sweep_expired(self) -> int:
        """Run one expiry sweep now."""
        return self.sweeper.sweep()

    # ── Issue ────────────────────────────────────────────────────────

    def create_session(
        self,
        user_id: str,
        email: str,
        role: str,
        device_info: str | None = None,
        ip_address: str | None = None,
    ) -> TokenPair:
        """
        Register a new session for an already-authenticated principal
        and return its access + refresh tokens.
        """
        now = self.clock.now()
        record = SessionRecord(
            session_id=generate_session_id(),
            user_id=user_id,
            email=email,
            role=role,
            created_at=now,
            last_activity=now,
            expires_at=now + self.settings.refresh_token_lifetime,
            refresh_token=generate_refresh_token(),
            device_info=device_info,
            ip_address=ip_address,
        )

        # Limit check and insert must not interleave with another
        # creation for the same user.
        with self.store.lock:
            self.limiter.enforce_limit(user_id, now)
            try:
                self.store.insert(record)
            except DuplicateSessionId:
                logger.error("Session id collision for user %s", user_id)
                raise

        logger.info("Created session %s for user %s", record.session_id, user_id)
        return TokenPair(
            access_token=self.codec.sign_access_token(self._claims_for(record)),
            refresh_token=record.refresh_token,
        )

    # ── Validate / refresh ───────────────────────────────────────────

    def validate_access_token(self, token: str) -> SessionData | None:
        """Return the session named by a bearer token, or None."""
        try:
            claims = self.codec.verify_access_token(token)
            return self._activate(claims.session_id, expected_user_id=claims.user_id)
        except NotAuthenticated as exc:
            logger.debug("Access token rejected: %s", type(exc).__name__)
            return None

    def refresh_session(self, refresh_token: str) -> TokenPair | None:
        """Mint a new access token; the refresh token is returned unchanged."""
        try:
            record = self.store.find_by_refresh_token(refresh_token)
            if record is None:
                raise SessionNotFound("Unknown refresh token")
            session = self._activate(record.session_id)
        except NotAuthenticated as exc:
            logger.debug("Refresh rejected: %s", type(exc).__name__)
            return None

        return TokenPair(
            access_token=self.codec.sign_access_token(self._claims_for(session)),
            refresh_token=session.refresh_token,
        )

    # ── Revoke ───────────────────────────────────────────────────────

    def destroy_session(self, session_id: str) -> bool:
        removed = self.store.remove(session_id)
        if removed:
            logger.info("Destroyed session %s", session_id)
        return removed

    def destroy_all_user_sessions(self, user_id: str) -> int:
        """
        Log a user out everywhere.

        Returns the number of live sessions destroyed.  Stale records
        still waiting for the sweeper are dropped too but not counted.
        """
        with self.store.lock:
            live_ids = {r.session_id for r in self.store.list_by_user(user_id, self.clock.now())}
            destroyed = 0
            for session_id in self.store.session_ids_for_user(user_id):
                if self.store.remove(session_id) and session_id in live_ids:
                    destroyed += 1

        if destroyed:
            logger.info("Destroyed %d session(s) for user %s", destroyed, user_id)
        return destroyed

    # ── Introspection ────────────────────────────────────────────────

    def get_user_sessions(self, user_id: str) -> list[SessionData]:
        records = self.store.list_by_user(user_id, self.clock.now())
        records.sort(key=lambda r: (r.created_at, r.session_id))
        return [r.snapshot() for r in records]

    def get_stats(self) -> SessionStats:
        return self.store.stats(self.clock.now())

    # ── Helpers ──────────────────────────────────────────────────────

    def _activate(self, session_id: str, expected_user_id: str | None = None) -> SessionData:
        """Liveness check + ``last_activity`` bump, as one critical section."""
        with self.store.lock:
            record = self.store.get(session_id)
            if record is None:
                raise SessionNotFound(session_id)
            if expected_user_id is not None and record.user_id != expected_user_id:
                raise SessionNotFound(session_id)

            now = self.clock.now()
            if not record.is_live(now):
                self.store.remove(session_id)
                raise SessionExpired(session_id)

            self.store.touch(session_id, now)
            return record.snapshot()

    @staticmethod
    def _claims_for(record: SessionRecord) -> AccessClaims:
        return AccessClaims(
            session_id=record.session_id,
            user_id=record.user_id,
            email=record.email,
            role=record.role,
        )
