"""
Models package — the session layer's in-memory record types.
"""

from authsession.models.session import SessionData, SessionRecord, SessionStats, TokenPair

__all__ = [
    "SessionData",
    "SessionRecord",
    "SessionStats",
    "TokenPair",
]
