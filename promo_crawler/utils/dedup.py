from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from ..adapters.base import ProductRecord


def unique_records(
    records: Iterable[ProductRecord],
    seen: Optional[Set[Tuple[str, str]]] = None,
) -> List[ProductRecord]:
    """
    Keep the first record for every (name, category) key, preserving order.
    Pass a shared ``seen`` set to extend the same rule across several batches;
    it is updated in place.
    """
    if seen is None:
        seen = set()
    out: List[ProductRecord] = []
    for record in records:
        if record.key in seen:
            continue
        seen.add(record.key)
        out.append(record)
    return out
