from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import Workbook


def report_html(categories: list[tuple[str, list[list[str]]]]) -> str:
    """Build an eLCA element-types summary fragment."""
    parts = ['<div class="print-content"><ul class="category">']
    for heading, rows in categories:
        body = "".join("<tr>" + "".join(f"<td>{c}</td>" for c in row) + "</tr>" for row in rows)
        parts.append(
            f"<li><h1>{heading}</h1><table>"
            "<thead><tr><th>Indicator</th><th>Unit</th><th>Manufacture</th></tr></thead>"
            f"<tbody>{body}</tbody></table></li>"
        )
    parts.append("</ul></div>")
    return "".join(parts)


GWP_ROW = ["GWP", "kg CO2 equiv.", "10", "5", "1", "16", "-2"]


@pytest.fixture
def sample_html() -> str:
    return report_html([("1.1 Foo", [GWP_ROW])])


def write_xlsx(path: Path, cells: dict[tuple[int, int], object]) -> Path:
    wb = Workbook()
    ws = wb.active
    for (r, c), v in cells.items():
        ws.cell(row=r, column=c, value=v)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture
def make_report_html():
    return report_html


@pytest.fixture
def make_xlsx():
    return write_xlsx
