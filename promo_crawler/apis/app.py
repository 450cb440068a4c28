from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

try:
    from fastapi import FastAPI, HTTPException
    from pydantic import BaseModel
except Exception as exc:  # pragma: no cover - optional dependency
    raise RuntimeError(
        "FastAPI not installed. Install with `pip install 'promo-crawler[api]'` "
        "or avoid using the API server."
    ) from exc

from ..config import CrawlConfig
from ..errors import CrawlError
from ..utils.loader import load_symbol
from ..engines.base import CrawlReport
from ..export.grouping import group_by_discount
from ..version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(title="promo_crawler API", version=__version__)


class CrawlRequest(BaseModel):
    root_url: Optional[str] = None
    max_concurrency: Optional[int] = None
    request_timeout: Optional[float] = None
    engine: Optional[str] = None
    adapter: Optional[str] = None


class CrawlStats(BaseModel):
    links: int
    visited: int
    dropped: List[str]
    products: int


class CrawlResponse(BaseModel):
    stats: CrawlStats
    # discount label -> products, same shape as the JSON exporter output
    discounts: Dict[str, List[Dict[str, Any]]]


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


def _build_config(req: CrawlRequest) -> CrawlConfig:
    cfg = CrawlConfig.from_env()
    if req.root_url:
        cfg.root_url = req.root_url
    if req.max_concurrency is not None:
        cfg.max_concurrency = req.max_concurrency
    if req.request_timeout is not None:
        cfg.request_timeout = req.request_timeout
    if req.engine:
        cfg.engine = req.engine
    if req.adapter:
        cfg.adapter = req.adapter
    cfg.validate()
    return cfg


@app.post("/crawl", response_model=CrawlResponse)
async def crawl(req: CrawlRequest) -> CrawlResponse:
    try:
        cfg = _build_config(req)
        engine_cls = load_symbol(cfg.engine)
        engine = engine_cls(cfg)
    except (ValueError, ImportError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    try:
        report: CrawlReport = await engine.crawl()
    except CrawlError as exc:
        logger.warning("Crawl of %s failed: %s", cfg.root_url, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    grouped = group_by_discount(report.records)
    return CrawlResponse(
        stats=CrawlStats(
            links=report.link_count,
            visited=report.visited_count,
            dropped=report.failed_links,
            products=len(report.records),
        ),
        discounts={label: [r.to_dict() for r in records] for label, records in grouped.items()},
    )
