from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for every error the crawler raises on purpose."""


class FetchError(CrawlError):
    """
    A page could not be retrieved.
    Fatal for the landing page; listing pages that raise it are dropped.
    """

    def __init__(self, url: str, status: Optional[int] = None, reason: str = "") -> None:
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else (reason or "request failed")
        super().__init__(f"Failed to fetch {url}: {detail}")


class MalformedPageError(CrawlError):
    """A page broke a structural assumption the extractors rely on (e.g. a link without href)."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.url = url
        super().__init__(f"{message} ({url})" if url else message)
