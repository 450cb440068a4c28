from __future__ import annotations

from typing import Dict, Iterable, List

from ..adapters.base import ProductRecord

#: discount label ("" = no discount) -> records carrying it, in crawl order
Grouping = Dict[str, List[ProductRecord]]


def group_by_discount(records: Iterable[ProductRecord]) -> Grouping:
    grouped: Grouping = {}
    for record in records:
        grouped.setdefault(record.discount_label, []).append(record)
    return grouped
