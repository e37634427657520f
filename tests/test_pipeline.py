from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from elca_fill.errors import InvalidTargetPath, TemplateVersionNotFound, UnknownIndicator
from elca_fill.services.pipeline import fill_workbook, project_id_from_path
from elca_fill.services.xlsx.templates import DirectoryTemplateResolver, last_row_marker
from elca_fill.services.xlsx.workbook_io import load_workbook


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Building A.56668.xlsx", "56668"),
        ("a.b.12.xlsx", "12"),
        ("x.1.XLSX", "1"),
    ],
)
def test_project_id_from_path(name: str, expected: str) -> None:
    assert project_id_from_path(Path("/tmp") / name) == expected


@pytest.mark.parametrize("name", ["Building.xlsx", "Building.abc.xlsx", "Building.56668.xls", "56668.csv"])
def test_project_id_from_path_rejects(name: str) -> None:
    with pytest.raises(InvalidTargetPath):
        project_id_from_path(Path(name))


@pytest.fixture
def template_setup(tmp_path: Path, make_xlsx):
    templates = tmp_path / "templates"
    make_xlsx(templates / "a.xlsx", {(5, 3): "#[KG1.1/GWP/CO2/TOTAL]", (6, 3): "[KG9.9/XX/YY/TOTAL]", (8, 1): "V4.1"})
    make_xlsx(templates / "b.xlsx", {(2, 2): "#[KG1.1/GWP/CO2/TOTAL]", (8, 1): "V3.0"})
    target = make_xlsx(
        tmp_path / "Project.56668.xlsx",
        {(5, 3): "old", (6, 3): "keep", (8, 1): "V4.1"},
    )
    resolver = DirectoryTemplateResolver(templates_dir=templates, version_reader=last_row_marker())
    return target, resolver


def test_fill_workbook(template_setup, sample_html: str) -> None:
    target, resolver = template_setup
    result = fill_workbook(
        target,
        sample_html,
        resolver=resolver,
        version_reader=resolver.version_reader,
        now=datetime(2026, 10, 18, 9, 0, 0),
    )

    assert result.version == "4.1"
    assert len(result.placeholders) == 5
    assert len(result.bind.applied) == 1
    assert result.stamp == "Edited on 2026-10-18 09:00:00"

    ws = load_workbook(target).active
    assert ws.cell(row=5, column=3).value == 16
    assert ws.cell(row=6, column=3).value == "keep"
    assert ws["A1"].value == "Edited on 2026-10-18 09:00:00"
    assert sorted(p.name for p in target.parent.iterdir() if p.is_file()) == ["Project.56668.xlsx"]


def test_fill_without_stamp(template_setup, sample_html: str) -> None:
    target, resolver = template_setup
    fill_workbook(target, sample_html, resolver=resolver, version_reader=resolver.version_reader, stamp=False)
    assert load_workbook(target).active["A1"].value is None


def test_fill_failure_leaves_target_untouched(template_setup, make_report_html) -> None:
    target, resolver = template_setup
    before = target.read_bytes()

    bad = make_report_html([("1.1 Foo", [["???", "kg", "1", "1", "1", "1", "1"]])])
    with pytest.raises(UnknownIndicator):
        fill_workbook(target, bad, resolver=resolver, version_reader=resolver.version_reader)
    assert target.read_bytes() == before


def test_fill_unknown_version(tmp_path: Path, make_xlsx, sample_html: str) -> None:
    templates = tmp_path / "templates"
    make_xlsx(templates / "a.xlsx", {(1, 1): "V4.1"})
    target = make_xlsx(tmp_path / "Project.1.xlsx", {(3, 1): "V5.0"})
    before = target.read_bytes()
    resolver = DirectoryTemplateResolver(templates_dir=templates, version_reader=last_row_marker())

    with pytest.raises(TemplateVersionNotFound):
        fill_workbook(target, sample_html, resolver=resolver, version_reader=resolver.version_reader)
    assert target.read_bytes() == before
