"""Validation of feed tables against the schema registry.

Issues are returned as data, never raised:
- file level: missing required file, unknown file, empty required file
- row level: missing required field, value failing a field rule
- parse level: records dropped by the CSV codec (warnings, optional)

Each row is checked on its own; one bad row never stops the sweep.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from gtfs_engine.core.config import DEFAULT_SETTINGS, EngineSettings
from gtfs_engine.models.rules import Rule
from gtfs_engine.models.schemas import GTFS_SPEC, FeedSpec, TableSchema

if TYPE_CHECKING:
    from gtfs_engine.io.csv_codec import Row, Table

LOGGER = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in a feed."""

    severity: str  # "error" / "warning"
    code: str  # e.g. "missing_required_file", "invalid_value"
    message: str
    filename: str | None = None
    row: int | None = None  # 1-based
    field: str | None = None
    value: str | None = None


@dataclass
class ValidationReport:
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == ERROR]

    @property
    def warnings(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == WARNING]

    @property
    def ok(self) -> bool:
        return not any(i.severity == ERROR for i in self.issues)

    def add(self, severity: str, code: str, message: str, **kwargs: Any) -> None:
        self.issues.append(ValidationIssue(severity, code, message, **kwargs))

    def extend(self, other: ValidationReport) -> None:
        self.issues.extend(other.issues)

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "issues": [asdict(i) for i in self.issues],
        }


def _is_missing(row: Row, name: str) -> bool:
    return name not in row or row[name] is None or row[name] == ""


class Validator:
    """Applies a `FeedSpec` to tables and feeds."""

    def __init__(
        self,
        spec: FeedSpec = GTFS_SPEC,
        settings: EngineSettings = DEFAULT_SETTINGS,
    ) -> None:
        self.spec = spec
        self.settings = settings

    def validate_file(
        self,
        filename: str,
        table: Table | Iterable[Row],
        schema: TableSchema | None = None,
    ) -> ValidationReport:
        report = ValidationReport()
        schema = schema if schema is not None else self.spec.schema_for(filename)

        if schema is None:
            report.add(WARNING, "unknown_file", f"Unknown file: {filename}", filename=filename)
            return report

        rows: list[Row] = list(getattr(table, "rows", table))
        if self.spec.is_required(filename) and not rows:
            report.add(
                ERROR, "empty_required_file", f"Required file {filename} is empty", filename=filename
            )
            return report

        if self.settings.warn_on_malformed_lines:
            for line in getattr(table, "malformed_lines", ()):
                report.add(
                    WARNING,
                    "malformed_line",
                    f"{filename} line {line}: Dropped malformed line "
                    "(field count does not match header)",
                    filename=filename,
                    row=line,
                )

        for index, row in enumerate(rows, start=1):
            self._validate_row(report, filename, index, row, schema)

        return report

    def _validate_row(
        self,
        report: ValidationReport,
        filename: str,
        index: int,
        row: Row,
        schema: TableSchema,
    ) -> None:
        for name in schema.required_fields:
            if _is_missing(row, name):
                report.add(
                    ERROR,
                    "missing_required_field",
                    f"{filename} row {index}: Missing required field '{name}'",
                    filename=filename,
                    row=index,
                    field=name,
                )

        for name, raw in row.items():
            if raw is None or raw == "":
                continue
            value = str(raw)
            for rule in self.spec.rules_for(name):
                if rule is Rule.REQUIRED_FIELD:
                    continue
                if not self.spec.check(rule, value):
                    report.add(
                        ERROR,
                        "invalid_value",
                        f"{filename} row {index}: Invalid value for '{name}': '{value}'",
                        filename=filename,
                        row=index,
                        field=name,
                        value=value,
                    )

    def validate_feed(
        self,
        tables: Mapping[str, Table | Iterable[Row]],
        files: Iterable[str] | None = None,
    ) -> ValidationReport:
        """Validate every listed file, after checking the required ones are present.

        `tables` may also be a `Feed`, in which case its own file list is used.
        """
        if hasattr(tables, "tables") and hasattr(tables, "files"):
            files = tables.files if files is None else files
            tables = tables.tables
        files = list(tables) if files is None else list(files)
        report = ValidationReport()

        for required in self.spec.required_files:
            if required not in files:
                report.add(
                    ERROR,
                    "missing_required_file",
                    f"Missing required file: {required}",
                    filename=required,
                )

        for filename in files:
            report.extend(self.validate_file(filename, tables.get(filename, [])))

        LOGGER.info(
            "Validated %d files: %d errors, %d warnings",
            len(files),
            len(report.errors),
            len(report.warnings),
        )
        return report


_DEFAULT_VALIDATOR = Validator()


def validate_file(
    filename: str,
    table: Table | Iterable[Row],
    schema: TableSchema | None = None,
) -> ValidationReport:
    return _DEFAULT_VALIDATOR.validate_file(filename, table, schema)


def validate_feed(
    tables: Mapping[str, Table | Iterable[Row]],
    files: Iterable[str] | None = None,
) -> ValidationReport:
    return _DEFAULT_VALIDATOR.validate_feed(tables, files)
