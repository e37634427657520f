from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from elca_fill.models import FIELDS
from elca_fill.services.placeholders import placeholder_key, placeholder_marker
from elca_fill.services.vocabulary import INDICATOR_UNITS, TOTAL_CATEGORY, Indicator
from elca_fill.services.xlsx.templates import VERSION_PREFIX


HEADERS = ["category", "indicator", "unit", *[f.upper() for f in FIELDS]]
FIRST_DATA_ROW = 3


def write_template_skeleton(
    out: Path,
    *,
    version: str,
    categories: list[str] | None = None,
    indicators: list[Indicator] | None = None,
    version_column: int = 1,
    hash_prefix: bool = True,
) -> Path:
    """Write a template with one placeholder row per (category, indicator).

    Row 1 is left for the "Edited on" stamp, row 2 holds headers, and the
    last row carries the `V<version>` marker in `version_column`.
    """
    cats = [c.strip() for c in (categories or [TOTAL_CATEGORY]) if c and c.strip()]
    inds = list(indicators or list(Indicator))

    wb = Workbook()
    ws = wb.active
    ws.title = "LCA"

    header_font = Font(bold=True)
    header_fill = PatternFill("solid", fgColor="DDDDDD")
    header_align = Alignment(vertical="top", wrap_text=True)
    for i, h in enumerate(HEADERS, start=1):
        cell = ws.cell(row=2, column=i, value=h)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_align
        ws.column_dimensions[get_column_letter(i)].width = 14 if i <= 3 else 34
    ws.freeze_panes = f"A{FIRST_DATA_ROW}"

    r = FIRST_DATA_ROW
    for cat in cats:
        for ind in inds:
            unit = INDICATOR_UNITS[ind].value
            ws.cell(row=r, column=1, value=cat)
            ws.cell(row=r, column=2, value=ind.value)
            ws.cell(row=r, column=3, value=unit)
            for j, f in enumerate(FIELDS, start=4):
                key = placeholder_key(cat, ind.value, unit, f)
                ws.cell(row=r, column=j, value=placeholder_marker(key, hash_prefix=hash_prefix))
            r += 1

    ws.cell(row=r + 1, column=version_column, value=f"{VERSION_PREFIX}{version}")

    out.parent.mkdir(parents=True, exist_ok=True)
    wb.save(out)
    return out
