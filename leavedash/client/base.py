"""
HTTP plumbing shared by the leave backend clients.

Every client function takes an ``httpx.AsyncClient`` built by
``create_backend_client``. Failures are logged and re-raised unchanged;
nothing here retries.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from leavedash.core.config import settings

logger = logging.getLogger(__name__)


def create_backend_client(
    cookies: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Client bound to the leave backend, carrying the caller's session cookies."""
    return httpx.AsyncClient(
        base_url=settings.BACKEND_API_URL,
        timeout=settings.BACKEND_TIMEOUT,
        cookies=cookies,
        headers={"Accept": "application/json"},
        transport=transport,
    )


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    action: str,
    **kwargs: Any
) -> Any:
    """Send one request and return the decoded JSON body (None for empty bodies)."""
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error("Failed to %s: %s", action, exc)
        raise

    if not response.content:
        return None
    return response.json()
