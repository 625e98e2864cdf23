from typing import AsyncIterator

import httpx
from fastapi import Request

from leavedash.client.base import create_backend_client
from leavedash.core.config import settings


async def get_backend_client(request: Request) -> AsyncIterator[httpx.AsyncClient]:
    """Backend client that acts as the browser's session: its cookie is forwarded as-is."""
    session = request.cookies.get(settings.SESSION_COOKIE_NAME)
    cookies = {settings.SESSION_COOKIE_NAME: session} if session else None

    async with create_backend_client(cookies=cookies) as client:
        yield client
