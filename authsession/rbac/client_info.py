"""
Client provenance — device label and IP address for new sessions.

Both values are informational only (shown in the session list so a
user can recognise their devices).  They are never used for
authorization decisions.
"""

from dataclasses import dataclass

from fastapi import Request

UNKNOWN = "Unknown"

# Order matters: Edge and most mobile browsers also advertise "Chrome" /
# "Safari" in their user agent.
_USER_AGENT_LABELS: list[tuple[str, str]] = [
    ("Edg", "Edge Browser"),
    ("Firefox", "Firefox Browser"),
    ("Chrome", "Chrome Browser"),
    ("Mobile", "Mobile Device"),
    ("Safari", "Safari Browser"),
]


@dataclass
class ClientInfo:
    device_info: str
    ip_address: str


def parse_user_agent(user_agent: str | None) -> str:
    """Map a raw User-Agent header to a coarse device label."""
    if not user_agent:
        return "Unknown Device"
    for marker, label in _USER_AGENT_LABELS:
        if marker in user_agent:
            return label
    return "Unknown Device"


def resolve_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN


async def get_client_info(request: Request) -> ClientInfo:
    """FastAPI dependency: provenance for the upstream login route.

    The login handler (outside this service) depends on this and passes
    the result to ``SessionManager.create_session``.
    """
    return ClientInfo(
        device_info=parse_user_agent(request.headers.get("user-agent")),
        ip_address=resolve_client_ip(request),
    )
