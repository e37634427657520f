from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from elca_fill.errors import InvalidTargetPath
from elca_fill.models import PlaceholderMap, PlacementTable, ReportModel
from elca_fill.services.placeholders import flatten_report
from elca_fill.services.report_parser import parse_report_html
from elca_fill.services.xlsx.binder import BindResult, bind_placeholders, stamp_generated
from elca_fill.services.xlsx.templates import VersionReader
from elca_fill.services.xlsx.workbook_io import load_workbook, save_workbook


class TemplateResolver(Protocol):
    def resolve(self, version: str) -> PlacementTable: ...


def project_id_from_path(path: Path) -> str:
    """`Building A.56668.xlsx` -> `56668`."""
    name = Path(path).name
    if not name.lower().endswith(".xlsx"):
        raise InvalidTargetPath(path, "Provided file path is not an .xlsx file")
    dots = name.split(".")
    project_id = dots[-2] if len(dots) >= 3 else ""
    if not project_id.isdigit():
        raise InvalidTargetPath(path, "No project ID found in file name")
    return project_id


@dataclass(frozen=True)
class FillResult:
    target: Path
    version: str
    report: ReportModel
    placeholders: PlaceholderMap
    placements: PlacementTable
    bind: BindResult
    stamp: str = ""


def fill_workbook(
    target: Path,
    html: str,
    *,
    resolver: TemplateResolver,
    version_reader: VersionReader,
    strict_duplicates: bool = True,
    stamp: bool = True,
    now: datetime | None = None,
) -> FillResult:
    """parse -> flatten -> resolve template -> bind -> save.

    Any failure raises before the target file is touched.
    """
    report = parse_report_html(html, strict_duplicates=strict_duplicates)
    placeholders = flatten_report(report)

    wb = load_workbook(target)
    version = version_reader(wb)
    placements = resolver.resolve(version)

    bound = bind_placeholders(wb, placeholders, placements)
    stamp_text = stamp_generated(wb, now) if stamp else ""
    save_workbook(wb, target)

    return FillResult(
        target=Path(target),
        version=version,
        report=report,
        placeholders=placeholders,
        placements=placements,
        bind=bound,
        stamp=stamp_text,
    )
