"""
Pydantic schemas for request / response serialization.

Kept in a single file for now; split per-domain when it grows.
Schemas are deliberately decoupled from the session records so the
API surface can evolve independently of the store.  Refresh tokens
only ever leave the service inside a token pair, never in a listing.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ── Auth ─────────────────────────────────────────────────────────────
class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class TokenPairResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


# ── Sessions ─────────────────────────────────────────────────────────
class WhoAmIResponse(BaseModel):
    authenticated: bool
    session_id: str | None = None
    user_id: str | None = None
    email: str | None = None
    role: str | None = None


class SessionOut(BaseModel):
    session_id: str
    device_info: str | None = None
    ip_address: str | None = None
    created_at: datetime
    last_activity: datetime
    expires_at: datetime
    is_current: bool = False

    model_config = {"from_attributes": True}


class SessionStatsOut(BaseModel):
    total_sessions: int
    active_users: int
    expired_sessions: int

    model_config = {"from_attributes": True}


# ── Generic ──────────────────────────────────────────────────────────
class MessageResponse(BaseModel):
    detail: str


class LogoutAllResponse(MessageResponse):
    sessions_destroyed: int
