from __future__ import annotations

import csv
from pathlib import Path

from .base import Exporter
from .grouping import Grouping


class CSVExporter(Exporter):
    """
    Writes one row per product, prefixed with its discount group.
    """

    _headers = [
        "discount",
        "name",
        "item_type",
        "link",
        "price",
        "price_promo",
    ]

    def export(self, data: Grouping, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            w = csv.writer(f)
            w.writerow(self._headers)
            for label, records in data.items():
                for record in records:
                    w.writerow(
                        [
                            label,
                            record.name,
                            record.category,
                            record.detail_url,
                            record.price,
                            record.promo_price,
                        ]
                    )
