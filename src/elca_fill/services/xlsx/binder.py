from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from openpyxl.workbook.workbook import Workbook

from elca_fill.models import PlaceholderMap, PlacementEntry
from elca_fill.services.xlsx.workbook_io import primary_sheet


STAMP_ROW = 1
STAMP_COLUMN = 1


@dataclass
class BindResult:
    applied: list[PlacementEntry] = field(default_factory=list)
    # placeholder sites the report had no (usable) value for
    skipped: list[PlacementEntry] = field(default_factory=list)


def bind_placeholders(
    wb: Workbook,
    placeholders: PlaceholderMap,
    placements: Iterable[PlacementEntry],
) -> BindResult:
    """Write placeholder values into the first sheet at the placement coordinates.

    Unknown placeholders leave the cell untouched. NaN (unparseable report
    cell) counts as unknown so no invalid number reaches the workbook.
    """
    ws = primary_sheet(wb)
    result = BindResult()
    for entry in placements:
        value = placeholders.get(entry.placeholder)
        if value is None or (isinstance(value, float) and math.isnan(value)):
            result.skipped.append(entry)
            continue
        ws.cell(row=entry.row, column=entry.column).value = value
        result.applied.append(entry)
    return result


def stamp_generated(wb: Workbook, when: datetime | None = None) -> str:
    text = f"Edited on {(when or datetime.now()).strftime('%Y-%m-%d %H:%M:%S')}"
    primary_sheet(wb).cell(row=STAMP_ROW, column=STAMP_COLUMN).value = text
    return text
