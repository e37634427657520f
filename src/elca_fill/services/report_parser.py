from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Tag

from elca_fill.errors import DuplicateCategory, DuplicateIndicator, MissingIndicatorLabel
from elca_fill.models import FIELDS, IndicatorRecord, ReportModel
from elca_fill.services.vocabulary import normalize_category, normalize_indicator, normalize_unit


CATEGORY_SELECTOR = ".print-content > .category > li"
HEADING_SELECTOR = ":scope > h1"
# html.parser does not synthesize <tbody>, so accept rows directly under <table> too.
ROW_SELECTOR = ":scope > table > tbody > tr, :scope > table > tr"
CELL_SELECTOR = ":scope > td"

# [indicator, unit, manufacture, disposal, servicing, total, potential]
ROW_CELLS = 2 + len(FIELDS)

# whitespace, including no-break and thin spaces
_SPACE_RE = re.compile(r"\s")
# commas only count as thousands separators in a well-formed grouping (1,234.5); "1,5" stays NaN
_THOUSANDS_RE = re.compile(r"[+-]?\d{1,3}(,\d{3})+(\.\d+)?")


def _text(el: Tag | None) -> str:
    if el is None:
        return ""
    return el.get_text().strip()


def _as_number(s: str) -> float:
    """Blank -> 0. Anything unparseable -> NaN (callers guard malformed input)."""
    s = _SPACE_RE.sub("", s)
    if _THOUSANDS_RE.fullmatch(s):
        s = s.replace(",", "")
    if not s:
        return 0.0
    try:
        return float(s)
    except ValueError:
        return float("nan")


def _parse_row(tr: Tag) -> tuple[str, IndicatorRecord]:
    cells: list[Any] = list(tr.select(CELL_SELECTOR))
    cells += [None] * (ROW_CELLS - len(cells))

    label = _text(cells[0])
    if not label:
        raise MissingIndicatorLabel(str(tr))
    indicator = normalize_indicator(label)
    unit = normalize_unit(_text(cells[1]))
    values = {f: _as_number(_text(c)) for f, c in zip(FIELDS, cells[2:ROW_CELLS])}
    return indicator, IndicatorRecord(unit=unit, **values)


def parse_report_html(html: str, *, strict_duplicates: bool = True) -> ReportModel:
    """Parse the eLCA "element types" summary fragment into category -> indicator -> record.

    Fails on the first unknown label; no partial model is returned.
    With `strict_duplicates=False` a repeated indicator (or category) replaces
    the earlier one instead of raising `DuplicateIndicator` (`DuplicateCategory`).
    """
    soup = BeautifulSoup(html or "", "html.parser")
    categories: dict[str, dict[str, IndicatorRecord]] = {}

    for li in soup.select(CATEGORY_SELECTOR):
        category = normalize_category(_text(li.select_one(HEADING_SELECTOR)))
        if category in categories and strict_duplicates:
            raise DuplicateCategory(category)

        records: dict[str, IndicatorRecord] = {}
        for tr in li.select(ROW_SELECTOR):
            indicator, record = _parse_row(tr)
            if indicator in records and strict_duplicates:
                raise DuplicateIndicator(category, indicator)
            records[indicator] = record
        categories[category] = records

    return MappingProxyType({k: MappingProxyType(v) for k, v in categories.items()})
