from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from bs4 import Tag

from ..errors import MalformedPageError
from ..utils.parsing import node_text, parse_price, select_first


class FieldRule:
    """
    Locate one node inside a product card and turn it into record fields.

    Subclasses set ``container`` (a class name) and ``selector`` (matched below the
    container) and implement ``read``. ``apply`` returns only the fields it could fill,
    so a missing node or an unparseable value leaves the record defaults alone.
    """

    container: str = ""
    selector: str = ""

    def apply(self, card: Tag) -> Dict[str, Any]:
        node = select_first(card, self.container, self.selector)
        if node is None:
            return {}
        return self.read(node)

    def read(self, node: Tag) -> Dict[str, Any]:  # pragma: no cover - interface
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.container!r}, {self.selector!r})"


class NameLinkRule(FieldRule):
    container = "product-item__caption"
    selector = "a"

    def read(self, node: Tag) -> Dict[str, Any]:
        href = node.get("href")
        if href is None:
            raise MalformedPageError(f"Product link {node_text(node)!r} has no href")
        return {"name": node_text(node), "detail_url": href}


class CategoryRule(FieldRule):
    container = "product-item__form"
    selector = "li"

    def read(self, node: Tag) -> Dict[str, Any]:
        return {"category": node_text(node)}


class _PriceRule(FieldRule):
    container = "product-item__price"
    field_name = ""

    def read(self, node: Tag) -> Dict[str, Any]:
        value: Optional[float] = parse_price(node_text(node))
        if value is None:
            return {}
        return {self.field_name: value}


class PriceRule(_PriceRule):
    selector = "span"
    field_name = "price"


class PromoPriceRule(_PriceRule):
    selector = ".new-price"
    field_name = "promo_price"


class DiscountRule(FieldRule):
    container = "product-item__flags--discounts"
    selector = "p"

    def read(self, node: Tag) -> Dict[str, Any]:
        return {"discount_label": node_text(node)}


#: The closed set of rules applied to every product card.
DEFAULT_RULES: Tuple[FieldRule, ...] = (
    NameLinkRule(),
    CategoryRule(),
    PriceRule(),
    PromoPriceRule(),
    DiscountRule(),
)
