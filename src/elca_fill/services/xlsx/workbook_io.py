from __future__ import annotations

import zipfile
from datetime import datetime
from pathlib import Path

from openpyxl import load_workbook as openpyxl_load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from elca_fill.errors import InvalidWorkbook, WorksheetNotFound


TEMPLATE_SUFFIXES = {".xlsx", ".xlsm"}


def load_workbook(path: str | Path) -> Workbook:
    try:
        return openpyxl_load_workbook(Path(path), data_only=False)
    except (zipfile.BadZipFile, InvalidFileException, KeyError) as e:
        # KeyError: zip container without the expected workbook parts
        raise InvalidWorkbook(path, str(e) or type(e).__name__) from e


def primary_sheet(wb: Workbook) -> Worksheet:
    if not wb.worksheets:
        raise WorksheetNotFound()
    return wb.worksheets[0]


def save_workbook(wb: Workbook, path: str | Path) -> Path:
    """Save via a temp file next to `path` and swap it in, so a failed save leaves the old file."""
    out = Path(path)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    tmp_out = out.with_suffix(f".tmp.{ts}{out.suffix}")
    try:
        wb.save(tmp_out)
        tmp_out.replace(out)
    finally:
        if tmp_out.exists():
            tmp_out.unlink()
    return out


def iter_template_files(templates_dir: str | Path) -> list[Path]:
    """Candidate templates in a deterministic (name-sorted) order.

    Office lock files (`~$name.xlsx`) and hidden files are skipped.
    """
    d = Path(templates_dir)
    if not d.is_dir():
        return []
    out: list[Path] = []
    for p in sorted(d.iterdir(), key=lambda x: x.name):
        if not p.is_file() or p.suffix.lower() not in TEMPLATE_SUFFIXES:
            continue
        if p.name.startswith(("~$", ".")):
            continue
        out.append(p)
    return out
