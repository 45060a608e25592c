"""Client fingerprint (user agent and IP) recorded with refresh tokens."""

from typing import Annotated

from fastapi import Depends, Request

from src.taskboard.core.identity import ClientInfo

MAX_USER_AGENT_LENGTH = 512


def get_client_ip(request: Request) -> str | None:
    """Resolve the client IP.

    First X-Forwarded-For entry, then X-Real-IP, then the socket peer.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    if request.client:
        return request.client.host
    return None


def get_client_info(request: Request) -> ClientInfo:
    user_agent = request.headers.get("user-agent")
    return ClientInfo(
        user_agent=user_agent[:MAX_USER_AGENT_LENGTH] if user_agent else None,
        ip=get_client_ip(request),
    )


Client = Annotated[ClientInfo, Depends(get_client_info)]
