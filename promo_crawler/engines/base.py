from __future__ import annotations

from dataclasses import dataclass, field
from typing import List
from abc import ABC, abstractmethod

from ..adapters.base import ProductRecord


@dataclass
class CrawlReport:
    records: List[ProductRecord] = field(default_factory=list)  # de-duplicated, merge order
    link_count: int = 0  # listing pages discovered on the landing page
    visited_count: int = 0  # listing pages fetched and parsed
    failed_links: List[str] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.failed_links)


class CrawlEngine(ABC):
    """
    Abstract engine interface. Implementations own the crawl lifecycle.
    """
    @abstractmethod
    async def crawl(self) -> CrawlReport:  # pragma: no cover - interface
        ...
