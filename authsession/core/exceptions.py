"""
Session error taxonomy.

Everything under ``NotAuthenticated`` is an expected runtime outcome:
the session manager collapses those into ``None`` / ``False`` so a
caller can never tell *why* authentication failed.

``DuplicateSessionId`` is the only internal error. It means the id
generator or the store is broken, and it is allowed to propagate.
"""


class SessionError(Exception):
    """Base class for every session-layer error."""


class NotAuthenticated(SessionError):
    """Caller-facing failure; never surfaced with its reason."""


class InvalidToken(NotAuthenticated):
    """Malformed access token, bad signature, or missing claims."""


class TokenExpired(InvalidToken):
    """Access token is past its embedded expiry."""


class SessionNotFound(NotAuthenticated):
    """No record for the referenced session id or refresh token."""


class SessionExpired(NotAuthenticated):
    """Record exists but is past its absolute expiry."""


class DuplicateSessionId(SessionError):
    """A session id was inserted twice."""

    def __init__(self, session_id: str):
        super().__init__(f"Session id already exists: {session_id}")
        self.session_id = session_id
