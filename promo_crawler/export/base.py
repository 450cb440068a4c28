from __future__ import annotations

from typing import Protocol

from .grouping import Grouping

class Exporter(Protocol):
    def export(self, data: Grouping, path: str) -> None:
        ...
