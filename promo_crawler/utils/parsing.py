from __future__ import annotations

import math
from typing import Optional

from bs4 import BeautifulSoup, Tag

_PARSER = "html.parser"


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, _PARSER)


def select_first(node: Tag, container_class: str, selector: str) -> Optional[Tag]:
    """
    First descendant of ``node`` matching ``selector`` that sits inside an element
    carrying ``container_class``. None when nothing matches.
    """
    return node.select_one(f".{container_class} {selector}")


def node_text(node: Tag) -> str:
    # Join every text fragment, then collapse runs of whitespace.
    return " ".join(node.get_text().split())


def parse_price(text: str) -> Optional[float]:
    """
    Parse a displayed price such as "$19.99".
    Every "$" is dropped before parsing; unparseable text gives None instead of raising.
    """
    cleaned = text.replace("$", "").strip()
    if "_" in cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def join_root(root_url: str, href: str) -> str:
    # Plain concatenation: hrefs on the landing page are root-relative paths.
    return f"{root_url}{href}"
