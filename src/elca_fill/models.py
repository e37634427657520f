from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

# Lifecycle phase fields in report column order.
FIELDS: tuple[str, ...] = ("manufacture", "disposal", "servicing", "total", "potential")


@dataclass(frozen=True)
class IndicatorRecord:
    unit: str
    manufacture: float = 0.0
    disposal: float = 0.0
    servicing: float = 0.0
    total: float = 0.0
    potential: float = 0.0


# category -> indicator -> record. Parsers hand these out as read-only mappings.
CategoryRecord = Mapping[str, IndicatorRecord]
ReportModel = Mapping[str, CategoryRecord]

PlaceholderMap = Mapping[str, float]


@dataclass(frozen=True)
class PlacementEntry:
    row: int
    column: int
    placeholder: str


PlacementTable = tuple[PlacementEntry, ...]
