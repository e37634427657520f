from __future__ import annotations

import pytest

from elca_fill.errors import InputShapeError, UnknownCategory, UnknownIndicator, UnknownUnit
from elca_fill.services.vocabulary import (
    INDICATOR_LABEL_BY_CODE,
    INDICATOR_LABELS,
    INDICATOR_UNITS,
    UNIT_LABEL_BY_CODE,
    UNIT_LABELS,
    Indicator,
    normalize_category,
    normalize_indicator,
    normalize_unit,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Total / Construction", "TOTAL"),
        ("3.2 Foo", "KG3.2"),
        ("300 Bauwerk - Baukonstruktionen", "KG300"),
        ("1.1", "KG1.1"),
    ],
)
def test_normalize_category(raw: str, expected: str) -> None:
    assert normalize_category(raw) == expected


@pytest.mark.parametrize("raw", ["", "Total", "total / construction", "KG 300", " 3.2 Foo"])
def test_normalize_category_rejects_unknown(raw: str) -> None:
    with pytest.raises(UnknownCategory) as ei:
        normalize_category(raw)
    assert ei.value.raw == raw
    assert isinstance(ei.value, InputShapeError)


def test_indicator_table_is_total_over_known_labels() -> None:
    assert len(INDICATOR_LABELS) == 16
    assert {normalize_indicator(k) for k in INDICATOR_LABELS} == {i.value for i in Indicator}
    assert normalize_indicator("Total PE") == "TPE"
    assert normalize_indicator("ADP elem.") == "ADPE"
    assert normalize_indicator("ADP fossil") == "ADPF"
    assert normalize_indicator("GWP") == "GWP"


@pytest.mark.parametrize("raw", ["gwp", "TPE", "ADPE", "Total PE ", ""])
def test_normalize_indicator_rejects_unknown(raw: str) -> None:
    with pytest.raises(UnknownIndicator):
        normalize_indicator(raw)


def test_normalize_unit() -> None:
    assert len(UNIT_LABELS) == 9
    assert normalize_unit("kg CO2 equiv.") == "CO2"
    assert normalize_unit("kg R11 equiv.") == "CFC11"
    assert normalize_unit("kg SO2 eqv.") == "SO2"
    assert normalize_unit("MJ") == "MJ"
    assert normalize_unit("kg") == "KG"
    assert normalize_unit("m3") == "M3"


@pytest.mark.parametrize("raw", ["kg SO2 equiv.", "m³", "KG", ""])
def test_normalize_unit_rejects_unknown(raw: str) -> None:
    with pytest.raises(UnknownUnit):
        normalize_unit(raw)


def test_every_indicator_has_a_known_unit() -> None:
    assert set(INDICATOR_UNITS) == set(Indicator)
    assert set(INDICATOR_UNITS.values()) <= set(UNIT_LABELS.values())


def test_reverse_tables_round_trip() -> None:
    for code, label in INDICATOR_LABEL_BY_CODE.items():
        assert normalize_indicator(label) == code.value
    for code, label in UNIT_LABEL_BY_CODE.items():
        assert normalize_unit(label) == code.value
