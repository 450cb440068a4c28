from __future__ import annotations

import asyncio
from typing import Dict, Iterable, Optional

import pytest

from promo_crawler.errors import FetchError


def product_card(
    name: Optional[str] = "Mahogany Teakwood Candle",
    href: Optional[str] = "/velas/mahogany-teakwood",
    category: Optional[str] = "3-Wick",
    price: Optional[str] = "$19.99",
    promo: Optional[str] = None,
    discount: Optional[str] = None,
) -> str:
    """Markup of one listing card; pass None to leave a block out."""
    parts = ['<div class="product-item">']
    if name is not None:
        link = f'<a href="{href}">{name}</a>' if href is not None else f"<a>{name}</a>"
        parts.append(f'<div class="product-item__caption"><h3>{link}</h3></div>')
    if category is not None:
        parts.append(f'<div class="product-item__form"><ul><li>{category}</li></ul></div>')
    if price is not None or promo is not None:
        parts.append('<div class="product-item__price">')
        if price is not None:
            parts.append(f"<span>{price}</span>")
        if promo is not None:
            parts.append(f'<strong class="new-price">{promo}</strong>')
        parts.append("</div>")
    if discount is not None:
        parts.append(f'<div class="product-item__flags--discounts"><p>{discount}</p></div>')
    parts.append("</div>")
    return "".join(parts)


def listing_page(*cards: str) -> str:
    return f"<html><body><section class=\"grid\">{''.join(cards)}</section></body></html>"


def landing_page(*hrefs: str) -> str:
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body><nav>{anchors}</nav></body></html>"


class FakeFetcher:
    """Async fetch stand-in serving canned pages, with optional failures and delays."""

    def __init__(
        self,
        pages: Dict[str, str],
        failures: Iterable[str] = (),
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.pages = pages
        self.failures = set(failures)
        self.delays = delays or {}
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, url: str) -> str:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0.01))
            if url in self.failures:
                raise FetchError(url, status=500)
            return self.pages[url]
        finally:
            self.in_flight -= 1


@pytest.fixture
def make_card():
    return product_card


@pytest.fixture
def make_listing():
    return listing_page


@pytest.fixture
def make_landing():
    return landing_page


@pytest.fixture
def fake_fetcher():
    return FakeFetcher
