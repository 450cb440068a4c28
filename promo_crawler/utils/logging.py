from __future__ import annotations

import logging
import os

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

LOG_LEVEL_ENV = "PROMO_CRAWLER_LOG_LEVEL"


def resolve_level(level: str | int | None = None) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return _LEVELS.get(level.upper(), logging.INFO)
    return level


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure application logging with a consistent formatter.
    Falls back to PROMO_CRAWLER_LOG_LEVEL, then INFO.
    """
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    # aiohttp is chatty at DEBUG; keep its noise out of crawl progress lines.
    logging.getLogger("aiohttp").setLevel(max(resolve_level(level), logging.INFO))
