"""
Auth controller — token refresh, logout & log-out-everywhere.

Login and registration live with the user service: once credentials
are verified there, it calls ``SessionManager.create_session`` with
the provenance from ``get_client_info``.

Refresh is PUBLIC (the refresh token is the credential).
Logout routes require a valid session.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from authsession.models.session import SessionData
from authsession.rbac.dependencies import (
    get_current_session,
    get_optional_session,
    get_session_manager,
)
from authsession.schemas import (
    LogoutAllResponse,
    MessageResponse,
    RefreshTokenRequest,
    TokenPairResponse,
    WhoAmIResponse,
)
from authsession.services.session_manager import SessionManager

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/refresh", response_model=TokenPairResponse)
async def refresh_token(
    body: RefreshTokenRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """Exchange a refresh token for a new access token (refresh token unchanged)."""
    tokens = manager.refresh_session(body.refresh_token)
    if tokens is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
    return TokenPairResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=int(manager.codec.access_lifetime.total_seconds()),
    )


@router.delete("/logout", response_model=MessageResponse)
async def logout(
    session: SessionData = Depends(get_current_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Destroy the current session (server-side logout)."""
    manager.destroy_session(session.session_id)
    return MessageResponse(detail="Logged out successfully")


@router.delete("/logout-all", response_model=LogoutAllResponse)
async def logout_all(
    session: SessionData = Depends(get_current_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Destroy every session of the current user, this one included."""
    destroyed = manager.destroy_all_user_sessions(session.user_id)
    return LogoutAllResponse(
        detail="Logged out from all devices successfully",
        sessions_destroyed=destroyed,
    )


@router.get("/whoami", response_model=WhoAmIResponse)
async def whoami(session: SessionData | None = Depends(get_optional_session)):
    """Identity behind the bearer token, if any.  Never fails."""
    if session is None:
        return WhoAmIResponse(authenticated=False)
    return WhoAmIResponse(
        authenticated=True,
        session_id=session.session_id,
        user_id=session.user_id,
        email=session.email,
        role=session.role,
    )
