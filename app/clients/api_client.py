"""
app/clients/api_client.py

Purpose: HTTP client factory for talking to the platform API

- Shared httpx.AsyncClient configuration (base URL, timeout)
- Carries the session cookie so requests are authenticated
"""

from typing import Optional

import httpx

from app.core.config import settings

DEFAULT_TIMEOUT = 15.0


def create_api_client(
    base_url: str,
    session_token: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.AsyncClient:
    """
    Builds an AsyncClient for the platform API.

    Args:
        base_url: Site origin, e.g. "https://quicktech.example"
        session_token: Session token from login/registration
        transport: Optional transport override (ASGI app, mock)
        timeout: Request timeout in seconds

    Returns:
        Configured httpx.AsyncClient (caller closes it)
    """
    cookies = {settings.SESSION_COOKIE_NAME: session_token} if session_token else None
    return httpx.AsyncClient(
        base_url=base_url,
        cookies=cookies,
        headers={"Accept": "application/json"},
        timeout=timeout,
        transport=transport,
    )
