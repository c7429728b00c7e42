"""In-memory feed store: load, create, edit and export a GTFS feed.

The store owns one mutable `Feed`. All row operations edit it in place and
report problems through return values (`False` or a failed `LoadResult`)
rather than exceptions. Row indices are positional and go stale
after any add/delete on the same table.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

import pandas as pd

from gtfs_engine.core.config import DEFAULT_SETTINGS, EngineSettings
from gtfs_engine.io import (
    Row,
    Table,
    decode_text,
    parse_table,
    read_bundle,
    serialize_table,
    table_to_frame,
    write_bundle,
)
from gtfs_engine.models.schemas import GTFS_SPEC, FeedSpec
from gtfs_engine.models.validate import ValidationReport, Validator

LOGGER = logging.getLogger(__name__)

FREQUENCIES_FILE = "frequencies.txt"


@dataclass
class Feed:
    """Tables keyed by filename plus the ordered list of files present."""

    tables: dict[str, Table] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)

    def add_table(self, filename: str, table: Table | None = None) -> Table:
        table = table if table is not None else Table(name=filename)
        self.tables[filename] = table
        if filename not in self.files:
            self.files.append(filename)
        return table

    def remove_table(self, filename: str) -> bool:
        if filename not in self.tables:
            return False
        del self.tables[filename]
        self.files.remove(filename)
        return True

    def __contains__(self, filename: object) -> bool:
        return filename in self.tables


@dataclass(frozen=True)
class LoadResult:
    success: bool
    feed: Feed | None = None
    files: list[str] = field(default_factory=list)
    error: str | None = None


class FeedStore:
    """Owns the current feed and the editing operations on it."""

    def __init__(
        self,
        spec: FeedSpec = GTFS_SPEC,
        settings: EngineSettings = DEFAULT_SETTINGS,
    ) -> None:
        self.spec = spec
        self.settings = settings
        self.validator = Validator(spec, settings)
        self.feed = Feed()

    # ------------------------------------------------------------------
    # Loading / creation
    # ------------------------------------------------------------------
    def load_feed(self, bundle: Mapping[str, str | bytes]) -> LoadResult:
        """Replace the current feed with tables decoded from a {filename: content} bundle.

        Only names ending in the table suffix are kept. A member that cannot be
        decoded (bad UTF-8, or a CSV error the codec could not skip) fails the whole load and leaves the current feed untouched.
        """
        feed = Feed()
        try:
            for filename, content in bundle.items():
                if not filename.endswith(self.settings.table_suffix):
                    continue
                table = parse_table(decode_text(content), name=filename)
                feed.add_table(filename, table)
        except (UnicodeDecodeError, csv.Error) as exc:
            LOGGER.error("Failed to decode feed member: %s", exc)
            return LoadResult(success=False, error=f"Could not decode feed: {exc}")

        self.feed = feed
        LOGGER.info(
            "Loaded feed: %d files, %d rows",
            len(feed.files),
            sum(len(t) for t in feed.tables.values()),
        )
        return LoadResult(success=True, feed=feed, files=list(feed.files))

    def load_archive(self, path: Path) -> LoadResult:
        """Read a zip archive from disk and load it."""
        try:
            bundle = read_bundle(path, ignored_prefixes=self.settings.ignored_archive_prefixes)
        except (BadZipFile, OSError) as exc:
            LOGGER.error("Failed to read archive %s: %s", path, exc)
            return LoadResult(success=False, error=f"Could not read archive {path}: {exc}")
        return self.load_feed(bundle)

    def create_empty_feed(self) -> LoadResult:
        """Start a new feed: required files plus the starter optional files, all empty."""
        feed = Feed()
        for filename in (*self.spec.required_files, *self.settings.starter_optional_files):
            if self.spec.schema_for(filename) is None:
                continue
            feed.add_table(filename)

        self.feed = feed
        LOGGER.info("Created empty feed with %d files", len(feed.files))
        return LoadResult(success=True, feed=feed, files=list(feed.files))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def get_file_data(self, filename: str) -> list[Row]:
        table = self.feed.tables.get(filename)
        return table.rows if table is not None else []

    def get_all_data(self) -> dict[str, list[Row]]:
        return {name: table.rows for name, table in self.feed.tables.items()}

    def get_file_list(self) -> list[str]:
        return self.feed.files

    def get_frame(self, filename: str) -> pd.DataFrame:
        """Return one table as a string-typed DataFrame."""
        table = self.feed.tables.get(filename, Table(name=filename))
        return table_to_frame(table, self.spec.schema_for(filename))

    # ------------------------------------------------------------------
    # Row operations
    # ------------------------------------------------------------------
    def add_row(self, filename: str, row_data: Mapping[str, Any] | None = None) -> Row:
        """Append a row with every schema field initialised to "", overlaid by `row_data`."""
        row_data = dict(row_data or {})
        table = self.feed.tables.get(filename)
        if table is None:
            table = self.feed.add_table(filename)
            LOGGER.debug("Added %s to the feed", filename)

        schema = self.spec.schema_for(filename)
        new_row: Row = {}
        if schema is not None:
            for name in schema.all_fields():
                value = row_data.get(name)
                new_row[name] = "" if value is None else str(value)
        for name, value in row_data.items():
            if name not in new_row:
                new_row[name] = "" if value is None else str(value)

        table.rows.append(new_row)
        return new_row

    def _in_bounds(self, filename: str, index: int) -> bool:
        table = self.feed.tables.get(filename)
        ok = table is not None and 0 <= index < len(table)
        if not ok:
            LOGGER.debug("%s: row index %s out of range", filename, index)
        return ok

    def update_cell(self, filename: str, row_index: int, field_name: str, value: Any) -> bool:
        if not self._in_bounds(filename, row_index):
            return False
        row = self.feed.tables[filename].rows[row_index]
        row[field_name] = "" if value is None else str(value)
        return True

    def delete_row(self, filename: str, row_index: int) -> bool:
        if not self._in_bounds(filename, row_index):
            return False
        del self.feed.tables[filename].rows[row_index]
        return True

    def delete_rows(self, filename: str, indices: Iterable[int]) -> int:
        """Delete several rows; highest index first so earlier indices stay valid."""
        return sum(self.delete_row(filename, i) for i in sorted(set(indices), reverse=True))

    # ------------------------------------------------------------------
    # Frequencies (frequency-based trips)
    # ------------------------------------------------------------------
    def add_frequency(
        self,
        trip_id: str,
        start_time: str,
        end_time: str,
        headway_secs: int | str,
        exact_times: int | str = 0,
    ) -> Row:
        return self.add_row(
            FREQUENCIES_FILE,
            {
                "trip_id": trip_id,
                "start_time": start_time,
                "end_time": end_time,
                "headway_secs": str(headway_secs),
                "exact_times": str(exact_times),
            },
        )

    def get_frequencies_for_trip(self, trip_id: str) -> list[Row]:
        return [r for r in self.get_file_data(FREQUENCIES_FILE) if r.get("trip_id") == trip_id]

    def delete_frequency(self, trip_id: str, start_time: str) -> bool:
        """Delete the first frequency window matching trip and start time."""
        for index, row in enumerate(self.get_file_data(FREQUENCIES_FILE)):
            if row.get("trip_id") == trip_id and row.get("start_time") == start_time:
                return self.delete_row(FREQUENCIES_FILE, index)
        return False

    def trip_uses_frequencies(self, trip_id: str) -> bool:
        return bool(self.get_frequencies_for_trip(trip_id))

    # ------------------------------------------------------------------
    # Validation / export
    # ------------------------------------------------------------------
    def validate(self) -> ValidationReport:
        return self.validator.validate_feed(self.feed.tables, self.feed.files)

    def validate_file(self, filename: str) -> ValidationReport:
        return self.validator.validate_file(filename, self.feed.tables.get(filename, Table()))

    def export_tables(self) -> dict[str, str]:
        return export_tables(self.feed, self.spec)

    def export_archive(self, path: Path) -> Path:
        return write_bundle(path, self.export_tables())


def export_tables(feed: Feed, spec: FeedSpec = GTFS_SPEC) -> dict[str, str]:
    """Serialise every listed table; the result is ready for an archive writer.

    Unknown files fall back to their parsed header and data-driven columns.
    """
    out: dict[str, str] = {}
    for filename in feed.files:
        table = feed.tables.get(filename)
        if table is None:
            continue
        out[filename] = serialize_table(table, spec.schema_for(filename))
    LOGGER.info("Exported %d tables", len(out))
    return out
