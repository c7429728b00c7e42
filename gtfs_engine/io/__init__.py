"""Lightweight I/O helpers.

This module centralises:
- the CSV codec (`parse_table` / `serialize_table`)
- zip bundle reads/writes used by the CLI and `FeedStore.load_archive`
- `table_to_frame`, the pandas hand-off for analysis code
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from gtfs_engine.io.compressed import read_bundle, write_bundle
from gtfs_engine.io.csv_codec import Row, Table, column_order, parse_table, serialize_table
from gtfs_engine.models.schemas import TableSchema


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_text(path: Path, text: str) -> None:
    ensure_parent_dir(path)
    path.write_text(text, encoding="utf-8")


def decode_text(data: str | bytes) -> str:
    """Decode archive member bytes (UTF-8, optional BOM). Raises `UnicodeDecodeError`."""
    if isinstance(data, str):
        return data
    return data.decode("utf-8-sig")


def table_to_frame(table: Table | list[Row], schema: TableSchema | None = None) -> pd.DataFrame:
    """Return the table as a DataFrame of nullable strings, columns in export order.

    Absent cells become `<NA>`; nothing is coerced to numbers.
    """
    rows = table.rows if isinstance(table, Table) else table
    columns = column_order(table, schema)
    df = pd.DataFrame.from_records(rows, columns=columns)
    return df.astype("string")


__all__ = [
    "Row",
    "Table",
    "column_order",
    "decode_text",
    "ensure_parent_dir",
    "parse_table",
    "read_bundle",
    "serialize_table",
    "table_to_frame",
    "write_bundle",
    "write_text",
]
