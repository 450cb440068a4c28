from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from bs4 import Tag

from .base import ProductRecord
from .rules import DEFAULT_RULES, FieldRule
from ..errors import MalformedPageError
from ..utils.parsing import join_root, parse_document

logger = logging.getLogger(__name__)


class BathAndBodyWorksAdapter:
    """
    Adapter for the Bath & Body Works storefront.
    The landing page links to category listings; each listing renders a grid of
    ``.product-item`` cards.
    """

    name = "bathandbodyworks"
    card_selector = ".product-item"
    # Hrefs containing this are treated as links off the site and skipped.
    external_marker = "www"

    def __init__(self, rules: Optional[Iterable[FieldRule]] = None) -> None:
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES

    # ---- Landing page -------------------------------------------------------

    def discover_links(self, html: str, root_url: str) -> List[str]:
        soup = parse_document(html)
        hrefs = set()
        for anchor in soup.find_all("a"):
            href = anchor.get("href")
            if href is None:
                raise MalformedPageError(f"Anchor {anchor.get_text(strip=True)!r} has no href", url=root_url)
            hrefs.add(href)

        return [join_root(root_url, href) for href in hrefs if self.external_marker not in href]

    # ---- Listing pages ------------------------------------------------------

    def parse(self, url: str, html: str) -> List[ProductRecord]:
        soup = parse_document(html)
        records: List[ProductRecord] = []
        for card in soup.select(self.card_selector):
            try:
                records.append(self.extract(card))
            except MalformedPageError as exc:
                raise MalformedPageError(str(exc), url=url) from exc
        logger.debug("Parsed %s product cards on %s", len(records), url)
        return records

    def extract(self, card: Tag) -> ProductRecord:
        fields: Dict[str, Any] = {}
        for rule in self.rules:
            fields.update(rule.apply(card))
        return ProductRecord(**fields)
