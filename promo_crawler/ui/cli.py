from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List

from ..config import CrawlConfig
from ..errors import CrawlError
from ..utils.logging import resolve_level, setup_logging
from ..utils.loader import load_symbol
from ..engines.base import CrawlReport
from ..export.grouping import group_by_discount

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Crawl a storefront and group its products by discount")
    p.add_argument("--config", type=str, help="Path to config JSON", default=None)
    p.add_argument("--root-url", type=str, default=None, help="Landing page URL (default from config)")
    p.add_argument("--max-concurrency", type=int, default=None,
                   help="Cap on listing pages fetched at once (default: no cap)")
    p.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    p.add_argument("--engine", type=str, default=None, help="Engine dotted path (module:ClassName)")
    p.add_argument("--adapter", type=str, default=None, help="Site adapter dotted path (module:ClassName)")
    p.add_argument("--exporter", type=str, default=None, help="Exporter dotted path (module:ClassName)")
    p.add_argument("--output", type=str, default=None, help="Output file path")
    p.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--traceback", dest="traceback", action="store_true", default=None,
                   help="Log fatal errors with a traceback")
    p.add_argument("--no-traceback", dest="traceback", action="store_false",
                   help="Log fatal errors as a single line")
    p.add_argument("--serve", action="store_true", help="Run REST API server instead of CLI crawl")
    p.add_argument("--host", type=str, default="127.0.0.1", help="API host (when --serve)")
    p.add_argument("--port", type=int, default=8000, help="API port (when --serve)")
    return p


def _load_config(args: argparse.Namespace) -> CrawlConfig:
    if args.config:
        cfg = CrawlConfig.from_file(args.config)
    else:
        cfg = CrawlConfig.from_env()

    if args.root_url:
        cfg.root_url = args.root_url
    if args.max_concurrency is not None:
        cfg.max_concurrency = args.max_concurrency
    if args.timeout is not None:
        cfg.request_timeout = args.timeout
    if args.engine:
        cfg.engine = args.engine
    if args.adapter:
        cfg.adapter = args.adapter
    if args.exporter:
        cfg.exporter = args.exporter
    if args.output:
        cfg.output_path = args.output
    if args.log_level:
        cfg.log_level = args.log_level
    if args.traceback is not None:
        cfg.show_traceback = args.traceback

    cfg.validate()
    return cfg


def run_server(host: str, port: int) -> None:
    try:
        import uvicorn  # type: ignore
    except Exception as exc:  # pragma: no cover - optional dep
        raise SystemExit("To run the API, install dependencies: pip install 'promo-crawler[api]'") from exc
    uvicorn.run("promo_crawler.apis.app:app", host=host, port=port)


def run_crawl(cfg: CrawlConfig) -> CrawlReport:
    # Dynamic engine + exporter loading so upgrades don't require code edits.
    engine_cls = load_symbol(cfg.engine)
    exporter_cls = load_symbol(cfg.exporter)

    async def _run() -> CrawlReport:
        engine = engine_cls(cfg)
        return await engine.crawl()

    report: CrawlReport = asyncio.run(_run())
    grouped = group_by_discount(report.records)

    exporter = exporter_cls()
    exporter.export(grouped, cfg.output_path)

    logger.info("Finished! Pages: %s/%s | Dropped: %s | Products: %s | Groups: %s | Output: %s",
                report.visited_count,
                report.link_count,
                report.dropped_count,
                len(report.records),
                len(grouped),
                cfg.output_path)
    return report


def run_cli(argv: List[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.serve:
        run_server(args.host, args.port)
        return 0

    show_traceback = args.traceback is not False
    try:
        cfg = _load_config(args)
        show_traceback = cfg.show_traceback
        if not args.log_level:
            logging.getLogger().setLevel(resolve_level(cfg.log_level))
        logger.info("Starting crawl of %s", cfg.root_url)
        run_crawl(cfg)
    except (CrawlError, OSError, ValueError, ImportError) as exc:
        logger.error("Crawl failed: %s", exc, exc_info=show_traceback)
        return 1
    return 0


def main() -> int:
    return run_cli(sys.argv[1:])
