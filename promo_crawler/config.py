from __future__ import annotations

from dataclasses import dataclass, fields, asdict
from typing import Optional, Dict, Any
from pathlib import Path
from urllib.parse import urlparse
import logging
import os
import json

from .version import CONFIG_SCHEMA_VERSION

logger = logging.getLogger(__name__)

DEFAULT_ROOT_URL = "https://www.bathandbodyworks.mx"
DEFAULT_ENGINE = "promo_crawler.engines.simple_engine:SimpleCrawlEngine"
DEFAULT_ADAPTER = "promo_crawler.adapters.bnb:BathAndBodyWorksAdapter"
DEFAULT_EXPORTER = "promo_crawler.export.json_exporter:JSONExporter"
DEFAULT_OUTPUT_PATH = "output/products_by_discount.json"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class CrawlConfig:
    """
    Canonical configuration object passed throughout the system.
    Keep it dataclass-only (no heavy deps) to stay upgrade-friendly.
    """
    schema_version: int = CONFIG_SCHEMA_VERSION
    # Landing page; discovered hrefs are appended to it verbatim.
    root_url: str = DEFAULT_ROOT_URL
    # None dispatches every listing page at once.
    max_concurrency: Optional[int] = None
    request_timeout: float = 15.0
    user_agent: Optional[str] = None
    # Dotted paths so the engine/adapter/exporter can be swapped without code changes.
    engine: str = DEFAULT_ENGINE
    adapter: str = DEFAULT_ADAPTER
    exporter: str = DEFAULT_EXPORTER
    output_path: str = DEFAULT_OUTPUT_PATH
    log_level: str = "INFO"
    # Log fatal errors with their traceback.
    show_traceback: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    # ---------- Loaders ----------

    @classmethod
    def from_env(cls) -> "CrawlConfig":
        """
        Build config from environment variables (all optional).
        """
        def _get(name: str, default: str) -> str:
            return os.getenv(name, default)

        concurrency = _get("PROMO_CRAWLER_MAX_CONCURRENCY", "").strip()

        return cls(
            root_url=_get("PROMO_CRAWLER_ROOT_URL", DEFAULT_ROOT_URL),
            max_concurrency=int(concurrency) if concurrency else None,
            request_timeout=float(_get("PROMO_CRAWLER_REQUEST_TIMEOUT", "15.0")),
            user_agent=_get("PROMO_CRAWLER_USER_AGENT", "") or None,
            engine=_get("PROMO_CRAWLER_ENGINE", DEFAULT_ENGINE),
            adapter=_get("PROMO_CRAWLER_ADAPTER", DEFAULT_ADAPTER),
            exporter=_get("PROMO_CRAWLER_EXPORTER", DEFAULT_EXPORTER),
            output_path=_get("PROMO_CRAWLER_OUTPUT_PATH", DEFAULT_OUTPUT_PATH),
            log_level=_get("PROMO_CRAWLER_LOG_LEVEL", "INFO"),
            show_traceback=_get("PROMO_CRAWLER_TRACEBACK", "1").strip().lower() in _TRUTHY,
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "CrawlConfig":
        """
        Load configuration from a JSON file. Supports schema migration for older versions.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data = migrate_config(data)
        return cls(**data)

    # ---------- Validation ----------

    def validate(self) -> None:
        if not self.root_url:
            raise ValueError("root_url cannot be empty.")
        if urlparse(self.root_url).scheme not in ("http", "https"):
            raise ValueError(f"root_url must be an http(s) URL, got {self.root_url!r}")
        if self.max_concurrency is not None and self.max_concurrency <= 0:
            raise ValueError("max_concurrency must be > 0 (or unset for no cap)")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        # Validate output path parent exists or is creatable
        parent = Path(self.output_path).parent
        parent.mkdir(parents=True, exist_ok=True)


def migrate_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate config dict to the latest schema version.
    Keep this pure: returns a new dict, never mutates the input.
    """
    data = dict(raw)
    schema = data.get("schema_version", 1)

    if schema < 2:
        # v1 crawled a list of start URLs to a fixed depth; v2 starts from one landing page.
        start_urls = data.pop("start_urls", None) or []
        if start_urls and "root_url" not in data:
            data["root_url"] = start_urls[0]

    known = {f.name for f in fields(CrawlConfig)}
    dropped = sorted(k for k in data if k not in known)
    if dropped:
        logger.warning("Ignoring unsupported config keys: %s", ", ".join(dropped))
    data = {k: v for k, v in data.items() if k in known}

    data["schema_version"] = CONFIG_SCHEMA_VERSION
    return data
