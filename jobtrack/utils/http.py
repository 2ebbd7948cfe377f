from typing import AsyncIterator

import httpx


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One outbound HTTP client per request, closed when the response is sent."""
    async with httpx.AsyncClient() as client:
        yield client
