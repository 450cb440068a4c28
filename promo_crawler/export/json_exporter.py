from __future__ import annotations

import json
from pathlib import Path

from .base import Exporter
from .grouping import Grouping


class JSONExporter(Exporter):
    """
    Writes ``{discount label: [product, ...]}``; the empty label holds undiscounted products.
    """

    def export(self, data: Grouping, path: str) -> None:
        serializable = {label: [r.to_dict() for r in records] for label, records in data.items()}
        # Serialize before opening so a NaN/inf price fails without leaving a truncated file.
        payload = json.dumps(serializable, indent=2, ensure_ascii=False, allow_nan=False)
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)
