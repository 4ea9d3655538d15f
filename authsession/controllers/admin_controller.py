"""
Admin controller — operational visibility into the session store.

Every route uses `Depends(require_role("admin"))` for enforcement.
Controllers are THIN: they delegate to the session manager and
return schemas.
"""

from fastapi import APIRouter, Depends

from authsession.rbac.dependencies import get_session_manager, require_role
from authsession.schemas import SessionStatsOut
from authsession.services.session_manager import SessionManager

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_role("admin"))],
)


@router.get("/session-stats", response_model=SessionStatsOut)
async def session_stats(manager: SessionManager = Depends(get_session_manager)):
    """Totals, distinct users, and the sweep backlog (expired but not yet reclaimed)."""
    return SessionStatsOut.model_validate(manager.get_stats())
