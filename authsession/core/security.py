"""
Access-token codec & secret helpers.

- Access tokens are HS256 JWTs carrying session_id, user_id, email and
  role.  They are short-lived and never stored server-side.
- Expiry is checked against the injected clock, not the wall clock,
  so token lifetimes are testable without sleeping.
- Verification is purely cryptographic: whether the named session
  still exists is the session manager's job.
- Refresh tokens are opaque high-entropy strings; the store indexes
  them by SHA-256 hash.
"""

import hashlib
import secrets
import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from authsession.core.clock import Clock
from authsession.core.exceptions import InvalidToken, TokenExpired

_REQUIRED_CLAIMS = ("session_id", "user_id", "email", "role", "exp")


@dataclass(frozen=True)
class AccessClaims:
    session_id: str
    user_id: str
    email: str
    role: str


# ── Identifiers & token hashing ─────────────────────────────────────


def generate_session_id() -> str:
    return str(uuid.uuid4())


def generate_refresh_token() -> str:
    """64 url-safe characters of randomness."""
    return secrets.token_urlsafe(48)


def hash_token(token: str) -> str:
    """SHA-256 hash, suitable for high-entropy tokens."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


# ── JWT ──────────────────────────────────────────────────────────────


class TokenCodec:
    """Signs and verifies access tokens.  Stateless apart from config."""

    def __init__(
        self,
        secret_key: str,
        clock: Clock,
        *,
        algorithm: str = "HS256",
        access_lifetime: timedelta = timedelta(minutes=15),
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_lifetime = access_lifetime
        self._clock = clock

    @property
    def access_lifetime(self) -> timedelta:
        return self._access_lifetime

    def sign_access_token(self, claims: AccessClaims) -> str:
        now = self._clock.now()
        to_encode: dict[str, Any] = {
            "sub": claims.user_id,
            "session_id": claims.session_id,
            "user_id": claims.user_id,
            "email": claims.email,
            "role": claims.role,
            "iat": now,
            "exp": now + self._access_lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> AccessClaims:
        """Decode & validate a JWT.  Raises InvalidToken / TokenExpired."""
        if not token:
            raise InvalidToken("Empty token")
        try:
            # Expiry is checked below against our own clock.
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except (JWTError, UnicodeError) as exc:
            raise InvalidToken(str(exc)) from exc

        missing = [name for name in _REQUIRED_CLAIMS if payload.get(name) in (None, "")]
        if missing:
            raise InvalidToken(f"Missing claims: {', '.join(missing)}")

        try:
            expires_at = float(payload["exp"])
        except (TypeError, ValueError) as exc:
            raise InvalidToken("Malformed exp claim") from exc

        if self._clock.now().timestamp() > expires_at:
            raise TokenExpired("Access token has expired")

        return AccessClaims(
            session_id=str(payload["session_id"]),
            user_id=str(payload["user_id"]),
            email=str(payload["email"]),
            role=str(payload["role"]),
        )
