from __future__ import annotations

import re
from enum import Enum

from elca_fill.errors import UnknownCategory, UnknownIndicator, UnknownUnit


TOTAL_CATEGORY = "TOTAL"
TOTAL_CATEGORY_LABEL = "Total / Construction"
CATEGORY_PREFIX = "KG"
_LEADING_DIGIT_RE = re.compile(r"^[0-9]")


class Indicator(str, Enum):
    GWP = "GWP"
    ODP = "ODP"
    POCP = "POCP"
    AP = "AP"
    EP = "EP"
    PENRT = "PENRT"
    PENRM = "PENRM"
    PENRE = "PENRE"
    PERT = "PERT"
    PERM = "PERM"
    PERE = "PERE"
    SM = "SM"
    FW = "FW"
    TPE = "TPE"
    ADPE = "ADPE"
    ADPF = "ADPF"


class Unit(str, Enum):
    CO2 = "CO2"
    CFC11 = "CFC11"
    C2H4 = "C2H4"
    SO2 = "SO2"
    PO4 = "PO4"
    SB = "SB"
    MJ = "MJ"
    KG = "KG"
    M3 = "M3"


# Report label -> canonical code. Extend these tables to extend the vocabulary.
INDICATOR_LABELS: dict[str, Indicator] = {
    **{i.value: i for i in Indicator if i not in (Indicator.TPE, Indicator.ADPE, Indicator.ADPF)},
    "Total PE": Indicator.TPE,
    "ADP elem.": Indicator.ADPE,
    "ADP fossil": Indicator.ADPF,
}

UNIT_LABELS: dict[str, Unit] = {
    "kg CO2 equiv.": Unit.CO2,
    "kg R11 equiv.": Unit.CFC11,
    "kg ethene equiv.": Unit.C2H4,
    "kg SO2 eqv.": Unit.SO2,
    "kg PO4 equiv.": Unit.PO4,
    "kg Sb equiv.": Unit.SB,
    "MJ": Unit.MJ,
    "kg": Unit.KG,
    "m3": Unit.M3,
}

INDICATOR_LABEL_BY_CODE: dict[Indicator, str] = {v: k for k, v in INDICATOR_LABELS.items()}
UNIT_LABEL_BY_CODE: dict[Unit, str] = {v: k for k, v in UNIT_LABELS.items()}

# Unit each indicator is reported in (used when authoring template skeletons).
INDICATOR_UNITS: dict[Indicator, Unit] = {
    Indicator.GWP: Unit.CO2,
    Indicator.ODP: Unit.CFC11,
    Indicator.POCP: Unit.C2H4,
    Indicator.AP: Unit.SO2,
    Indicator.EP: Unit.PO4,
    Indicator.ADPE: Unit.SB,
    Indicator.ADPF: Unit.MJ,
    Indicator.PENRT: Unit.MJ,
    Indicator.PENRM: Unit.MJ,
    Indicator.PENRE: Unit.MJ,
    Indicator.PERT: Unit.MJ,
    Indicator.PERM: Unit.MJ,
    Indicator.PERE: Unit.MJ,
    Indicator.TPE: Unit.MJ,
    Indicator.SM: Unit.KG,
    Indicator.FW: Unit.M3,
}


def normalize_category(raw: str) -> str:
    """`Total / Construction` -> `TOTAL`, `3.2 Foo` -> `KG3.2`."""
    if raw == TOTAL_CATEGORY_LABEL:
        return TOTAL_CATEGORY
    if _LEADING_DIGIT_RE.match(raw):
        return f"{CATEGORY_PREFIX}{raw.split()[0]}"
    raise UnknownCategory(raw)


def normalize_indicator(raw: str) -> str:
    code = INDICATOR_LABELS.get(raw)
    if code is None:
        raise UnknownIndicator(raw)
    return code.value


def normalize_unit(raw: str) -> str:
    code = UNIT_LABELS.get(raw)
    if code is None:
        raise UnknownUnit(raw)
    return code.value
