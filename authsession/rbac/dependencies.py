"""
Request-authentication dependencies — the session layer's HTTP edge.

`get_current_session` is what protected routes depend on.  It:

1. Reads the bearer token from the Authorization header.
2. Hands it to the SessionManager, which verifies the signature,
   checks the session still exists and is unexpired, and bumps its
   last-activity timestamp.
3. Returns 401 when no token was sent and 403 when the token did not
   resolve to a live session, with NO detail about why (prevents
   session enumeration).

`require_role` is a *dependency factory* layered on top:

    @router.get("/stats")
    async def stats(session: SessionData = Depends(require_role("admin"))): ...
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authsession.models.session import SessionData
from authsession.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI
bearer_scheme = HTTPBearer(auto_error=False)


def get_session_manager(request: Request) -> SessionManager:
    """The manager built by the app factory, held on app.state."""
    return request.app.state.session_manager


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    manager: SessionManager = Depends(get_session_manager),
) -> SessionData:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Access token required", "code": "TOKEN_MISSING"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = manager.validate_access_token(credentials.credentials)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"message": "Invalid or expired token", "code": "TOKEN_INVALID"},
        )
    return session


async def get_optional_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    manager: SessionManager = Depends(get_session_manager),
) -> SessionData | None:
    """Like get_current_session, but anonymous requests pass through as None."""
    if credentials is None or not credentials.credentials:
        return None
    return manager.validate_access_token(credentials.credentials)


class require_role:
    """
    Dependency factory.

    Can be used as:
        Depends(require_role("admin"))
        Depends(require_role("admin", "editor"))
    """

    def __init__(self, *roles: str):
        self.allowed_roles = set(roles)

    async def __call__(
        self,
        session: SessionData = Depends(get_current_session),
    ) -> SessionData:
        if session.role not in self.allowed_roles:
            logger.warning(
                "Role denied for user %s: required one of: %s, has: %s",
                session.user_id,
                sorted(self.allowed_roles),
                session.role,
            )
            # Intentionally vague: do NOT reveal which roles are allowed
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"message": "Insufficient permissions", "code": "INSUFFICIENT_PERMISSIONS"},
            )
        return session
