from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from openpyxl.workbook.workbook import Workbook

from elca_fill.errors import TemplateVersionNotFound, VersionMarkerNotFound
from elca_fill.models import PlacementEntry, PlacementTable
from elca_fill.services.placeholders import parse_placeholder_marker
from elca_fill.services.xlsx.workbook_io import iter_template_files, load_workbook, primary_sheet


VERSION_PREFIX = "V"

VersionReader = Callable[[Workbook], str]


def _is_empty(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, str) and not v.strip():
        return True
    return False


def constant_version(version: str) -> VersionReader:
    """Every workbook reports `version` (templates whose version is fixed out-of-band)."""

    def _read(wb: Workbook) -> str:
        return version

    return _read


def last_row_marker(column: int = 1) -> VersionReader:
    """Read `V<version>` from `column` of the last populated row of the first sheet."""

    def _read(wb: Workbook) -> str:
        ws = primary_sheet(wb)
        last_row = last_populated_row(ws)
        if last_row is None:
            raise VersionMarkerNotFound(None)
        raw = ws.cell(row=last_row, column=column).value
        s = str(raw if raw is not None else "").strip()
        if not s.startswith(VERSION_PREFIX):
            raise VersionMarkerNotFound(raw, row=last_row, column=column)
        return s[len(VERSION_PREFIX) :].strip()

    return _read


def version_reader_for(strategy: str, *, version: str = "", column: int = 1) -> VersionReader:
    s = (strategy or "").strip().lower()
    if s == "constant":
        return constant_version(version)
    if s == "marker":
        return last_row_marker(column)
    raise ValueError(f"Unknown version strategy: {strategy!r} (expected 'constant' or 'marker')")


def last_populated_row(ws) -> int | None:
    last: int | None = None
    for idx, row in enumerate(ws.iter_rows(values_only=True), start=1):
        if any(not _is_empty(v) for v in row):
            last = idx
    return last


def scan_placements(wb: Workbook) -> PlacementTable:
    """Collect `[name]` / `#[name]` cells of the first sheet in row-major order."""
    ws = primary_sheet(wb)
    out: list[PlacementEntry] = []
    for row in ws.iter_rows():
        for cell in row:
            name = parse_placeholder_marker(cell.value)
            if name is None:
                continue
            out.append(PlacementEntry(row=cell.row, column=cell.column, placeholder=name))
    return tuple(out)


@dataclass(frozen=True)
class TemplateInfo:
    path: Path
    version: str | None
    error: str = ""


@dataclass
class DirectoryTemplateResolver:
    """Linear first-match lookup of a template by version over a directory.

    Candidates are visited in name order; the first whose version equals the
    query wins and scanning stops there.
    """

    templates_dir: Path
    version_reader: VersionReader
    load: Callable[[Path], Workbook] = field(default=load_workbook)

    def resolve(self, version: str) -> PlacementTable:
        for path in iter_template_files(self.templates_dir):
            wb = self.load(path)
            if self.version_reader(wb) == version:
                return scan_placements(wb)
        raise TemplateVersionNotFound(version)

    def describe(self) -> list[TemplateInfo]:
        """Version of every candidate (unreadable markers are reported, not raised)."""
        out: list[TemplateInfo] = []
        for path in iter_template_files(self.templates_dir):
            wb = self.load(path)
            try:
                out.append(TemplateInfo(path=path, version=self.version_reader(wb)))
            except VersionMarkerNotFound as e:
                out.append(TemplateInfo(path=path, version=None, error=str(e)))
        return out
