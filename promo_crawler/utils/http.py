from __future__ import annotations

import asyncio
from typing import Optional
from aiohttp import ClientSession, ClientTimeout
import aiohttp
import logging

from ..errors import FetchError

logger = logging.getLogger(__name__)


async def fetch_text(
    session: ClientSession,
    url: str,
    *,
    timeout: float = 15.0,
    user_agent: Optional[str] = None,
) -> str:
    """
    Fetch a URL and return body text. Raises FetchError on any transport or HTTP error.
    """
    headers = {}
    if user_agent:
        headers["User-Agent"] = user_agent

    try:
        async with session.get(url, headers=headers, timeout=ClientTimeout(total=timeout)) as resp:
            if resp.status >= 400:
                raise FetchError(url, status=resp.status)
            return await resp.text()
    except aiohttp.ClientError as exc:
        logger.debug("fetch_text failed for %s: %r", url, exc)
        raise FetchError(url, reason=repr(exc)) from exc
    except asyncio.TimeoutError as exc:
        logger.debug("fetch_text timed out for %s after %ss", url, timeout)
        raise FetchError(url, reason=f"timed out after {timeout}s") from exc


def create_session() -> ClientSession:
    """
    Create a shared aiohttp ClientSession.
    """
    # Note: caller is responsible for closing the session (await session.close()).
    connector = aiohttp.TCPConnector(limit=0)  # unlimited; concurrency managed by the engine
    return aiohttp.ClientSession(connector=connector)
