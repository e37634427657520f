from __future__ import annotations


class ElcaFillError(ValueError):
    """Base class for every error that aborts a fill run."""


# --- input shape -----------------------------------------------------------


class InputShapeError(ElcaFillError):
    """The report contains a label outside the known vocabulary."""


class UnknownCategory(InputShapeError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Unknown category name: {raw!r}")


class UnknownIndicator(InputShapeError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Unknown indicator name: {raw!r}")


class UnknownUnit(InputShapeError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Unknown unit: {raw!r}")


class MissingIndicatorLabel(InputShapeError):
    def __init__(self, row_html: str) -> None:
        self.row_html = row_html
        super().__init__(f"No indicator name found in element: {row_html}")


# --- integrity -------------------------------------------------------------


class IntegrityError(ElcaFillError):
    """Parsed data violates a uniqueness invariant (parser/vocabulary bug)."""


class DuplicatePlaceholderKey(IntegrityError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate placeholder key: {key}")


class DuplicateIndicator(IntegrityError):
    def __init__(self, category: str, indicator: str) -> None:
        self.category = category
        self.indicator = indicator
        super().__init__(f"Duplicate indicator {indicator} in category {category}")


class DuplicateCategory(IntegrityError):
    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"Duplicate category in report: {category}")


# --- resolution ------------------------------------------------------------


class ResolutionError(ElcaFillError):
    """No compatible template exists for the observed version."""


class TemplateVersionNotFound(ResolutionError):
    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Template file for version {version} not found")


class VersionMarkerNotFound(ResolutionError):
    def __init__(self, found: object = None, *, row: int | None = None, column: int | None = None) -> None:
        self.found = found
        self.row = row
        self.column = column
        where = f" at ({row}, {column})" if row is not None else ""
        super().__init__(f"Version marker (V<version>) not found{where}: {found!r}")


# --- structural ------------------------------------------------------------


class StructuralError(ElcaFillError):
    """A file or document does not have the expected structure."""


class WorksheetNotFound(StructuralError):
    def __init__(self) -> None:
        super().__init__("Worksheet not found in Excel file")


class InvalidWorkbook(StructuralError):
    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read workbook {path}: {reason}")


class ReportNotFound(StructuralError):
    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__("No ELCA data found: " + ", ".join(keys))


class InvalidTargetPath(StructuralError):
    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        super().__init__(f"{reason}: {path}")


# --- report source ---------------------------------------------------------


class SourceError(ElcaFillError):
    """The report source refused or failed the request."""


class AuthenticationFailed(SourceError):
    pass


class ReportFetchFailed(SourceError):
    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Data fetch failed with status {status_code}")
