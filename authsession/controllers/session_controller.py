"""
Session controller — "where am I logged in" listing & per-device revoke.

Every route requires a valid session, and a user can only see or
revoke their own sessions.  Unknown ids and other users' ids get the
same 404 so session ids cannot be probed.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from authsession.models.session import SessionData
from authsession.rbac.dependencies import get_current_session, get_session_manager
from authsession.schemas import MessageResponse, SessionOut
from authsession.services.session_manager import SessionManager

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.get("", response_model=list[SessionOut])
async def list_sessions(
    session: SessionData = Depends(get_current_session),
    manager: SessionManager = Depends(get_session_manager),
):
    sessions = manager.get_user_sessions(session.user_id)
    return [
        SessionOut(
            session_id=s.session_id,
            device_info=s.device_info,
            ip_address=s.ip_address,
            created_at=s.created_at,
            last_activity=s.last_activity,
            expires_at=s.expires_at,
            is_current=s.session_id == session.session_id,
        )
        for s in sessions
    ]


@router.delete("/{session_id}", response_model=MessageResponse)
async def revoke_session(
    session_id: str,
    session: SessionData = Depends(get_current_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Revoke one of the caller's sessions (e.g. a lost device)."""
    owned = {s.session_id for s in manager.get_user_sessions(session.user_id)}
    if session_id not in owned or not manager.destroy_session(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return MessageResponse(detail="Session terminated successfully")
