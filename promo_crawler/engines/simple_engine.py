from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Awaitable, Callable, Dict, Iterable, List, Set, Tuple

from .base import CrawlEngine, CrawlReport
from ..config import CrawlConfig
from ..adapters.base import ProductRecord, SiteAdapter
from ..errors import MalformedPageError
from ..utils.dedup import unique_records
from ..utils.http import create_session, fetch_text
from ..utils.loader import load_symbol

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[str]]


class SimpleCrawlEngine(CrawlEngine):
    """
    Landing page -> listing pages fan-out crawler.
    - Engine owns HTTP and scheduling.
    - Adapter owns link discovery and card parsing.
    - One task per listing page; results are merged by a single consumer as tasks finish.
    - A listing page that fails is logged and dropped; the crawl carries on.
    """
    def __init__(
        self,
        config: CrawlConfig,
        adapter: SiteAdapter | None = None,
        fetcher: Fetcher | None = None,
    ) -> None:
        self.config = config
        self.adapter: SiteAdapter = adapter if adapter is not None else load_symbol(config.adapter)()
        self._fetcher = fetcher

    async def crawl(self) -> CrawlReport:
        if self._fetcher is not None:
            return await self._run(self._fetcher)

        session = create_session()
        try:
            fetch = partial(
                fetch_text,
                session,
                timeout=self.config.request_timeout,
                user_agent=self.config.user_agent,
            )
            return await self._run(fetch)
        finally:
            await session.close()

    async def _run(self, fetch: Fetcher) -> CrawlReport:
        root_url = self.config.root_url
        logger.info("Fetching landing page %s with adapter %s", root_url, self.adapter.name)

        # Landing page errors are fatal: nothing can be crawled without its links.
        html = await fetch(root_url)
        links = self.adapter.discover_links(html, root_url)
        logger.info("Landing page links fetched: %s listing pages", len(links))

        return await self.crawl_links(links, fetch)

    async def crawl_links(self, links: Iterable[str], fetch: Fetcher) -> CrawlReport:
        links = list(links)
        report = CrawlReport(link_count=len(links))
        if not links:
            return report

        limit = self.config.max_concurrency or len(links)
        sem = asyncio.Semaphore(limit)
        seen: Set[Tuple[str, str]] = set()

        tasks: Dict[asyncio.Task[List[ProductRecord]], str] = {
            asyncio.create_task(self._scrape(url, fetch, sem)): url for url in links
        }
        pending = set(tasks)
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                # Retrieve every outcome in the batch before a fatal error can skip any.
                outcomes = [(task, tasks[task], task.exception()) for task in done]
                fatal = next((exc for _, _, exc in outcomes if isinstance(exc, MalformedPageError)), None)
                if fatal is not None:
                    raise fatal
                for task, url, exc in outcomes:
                    if exc is not None:
                        logger.warning("Dropping %s: %s", url, exc)
                        report.failed_links.append(url)
                        continue

                    added = unique_records(task.result(), seen)
                    report.records.extend(added)
                    report.visited_count += 1
                    logger.debug("Merged %s new records from %s", len(added), url)
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        if report.failed_links:
            logger.warning("%s of %s listing pages dropped", report.dropped_count, report.link_count)
        return report

    async def _scrape(self, url: str, fetch: Fetcher, sem: asyncio.Semaphore) -> List[ProductRecord]:
        async with sem:
            logger.info("Processing link %s", url)
            html = await fetch(url)
        # A listing grid can repeat a card; collapse those before the global merge.
        return unique_records(self.adapter.parse(url, html))
