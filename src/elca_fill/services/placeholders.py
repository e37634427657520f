from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any

from elca_fill.errors import DuplicatePlaceholderKey
from elca_fill.models import FIELDS, PlaceholderMap, ReportModel


# `[name]` or `#[name]`; the whole cell content must be the marker.
PLACEHOLDER_MARKER_RE = re.compile(r"#?\[(.+)\]", re.DOTALL)


def placeholder_key(category: str, indicator: str, unit: str, field: str) -> str:
    return f"{category}/{indicator}/{unit}/{field.upper()}"


def placeholder_marker(key: str, *, hash_prefix: bool = True) -> str:
    return f"#[{key}]" if hash_prefix else f"[{key}]"


def parse_placeholder_marker(value: Any) -> str | None:
    """Return the placeholder name when `value` is a marker cell, else None."""
    if value is None:
        return None
    m = PLACEHOLDER_MARKER_RE.fullmatch(str(value))
    if not m:
        return None
    return m.group(1)


def flatten_report(report: ReportModel) -> PlaceholderMap:
    """Flatten category -> indicator -> record into `{category}/{indicator}/{unit}/{FIELD}` -> value."""
    out: dict[str, float] = {}
    for category, indicators in report.items():
        for indicator, record in indicators.items():
            for field in FIELDS:
                key = placeholder_key(category, indicator, record.unit, field)
                if key in out:
                    raise DuplicatePlaceholderKey(key)
                out[key] = getattr(record, field)
    return MappingProxyType(out)
