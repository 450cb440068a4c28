from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Tuple


@dataclass(frozen=True)
class ProductRecord:
    """
    One product card as listed on a category page.
    Every field has a zero-value default so a card missing some markup still yields a record.
    """

    name: str = ""
    category: str = ""  # size / variant label shown on the card
    detail_url: str = ""
    price: float = 0.0
    promo_price: float = 0.0  # 0.0 when no promotion applies
    discount_label: str = ""  # "" means no active discount

    @property
    def key(self) -> Tuple[str, str]:
        """Identity used for de-duplication: same name + category is the same product."""
        return (self.name, self.category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "item_type": self.category,
            "link": self.detail_url,
            "price": self.price,
            "price_promo": self.promo_price,
            "discount": self.discount_label,
        }


class SiteAdapter(Protocol):
    """
    Interface for site-specific parsing logic.
    Engine owns the HTTP and scheduling; adapters own the markup.
    """

    name: str

    def discover_links(self, html: str, root_url: str) -> List[str]:
        """Return the absolute listing-page URLs found on the landing page."""
        ...

    def parse(self, url: str, html: str) -> List[ProductRecord]:
        """Return one record per product card found on a listing page."""
        ...
