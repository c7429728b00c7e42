"""CSV codec for feed tables.

Decoding:
- first non-blank record is the header; `"..."` quoting may hold commas, quotes (`""`) and newlines
- cells are trimmed after unquoting and always kept as text
- records whose field count differs from the header, or that the reader rejects
  (e.g. a cell over the csv field size limit), are dropped (line numbers kept on the table)

Encoding:
- column order is schema required + optional fields, then any extra fields found in the data
- a cell is quoted only when it contains a comma, a quote or a line break (`\n` or `\r`)
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from gtfs_engine.models.schemas import TableSchema

LOGGER = logging.getLogger(__name__)

Row = dict[str, str]


@dataclass
class Table:
    """Ordered rows of one feed file, plus the header order it was parsed with."""

    name: str = ""
    rows: list[Row] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)
    malformed_lines: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]


def parse_table(text: str, name: str = "") -> Table:
    """Decode CSV text into a `Table`. Never raises on malformed records."""
    table = Table(name=name)
    if not text or not text.strip():
        return table

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff"), newline=""), skipinitialspace=True)
    header: list[str] | None = None
    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            # the reader resets its state on the next call
            table.malformed_lines.append(reader.line_num)
            LOGGER.debug("%s: dropping line %d (%s)", name or "<table>", reader.line_num, exc)
            continue
        if not record or (len(record) == 1 and not record[0].strip()):
            continue
        cells = [cell.strip() for cell in record]
        if header is None:
            header = cells
            table.columns = list(header)
            continue
        if len(cells) != len(header):
            # reader.line_num is the last physical line of the record
            table.malformed_lines.append(reader.line_num)
            LOGGER.debug(
                "%s: dropping line %d (%d fields, header has %d)",
                name or "<table>",
                reader.line_num,
                len(cells),
                len(header),
            )
            continue
        table.rows.append(dict(zip(header, cells)))

    return table


def column_order(table: Table | list[Row], schema: TableSchema | None = None) -> list[str]:
    """Resolve export column order: schema fields, then any extra fields in data order."""
    rows = table.rows if isinstance(table, Table) else table
    parsed = table.columns if isinstance(table, Table) else []

    headers: list[str] = list(schema.all_fields()) if schema is not None else []
    seen = set(headers)
    for source in (parsed, *rows):
        for name in source:
            if name not in seen:
                seen.add(name)
                headers.append(name)
    return headers


def _encode_cell(value: object) -> str:
    text = "" if value is None else str(value)
    if "," in text or '"' in text or "\n" in text or "\r" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def serialize_table(table: Table | list[Row], schema: TableSchema | None = None) -> str:
    """Encode rows back to CSV text. The header line is always emitted."""
    rows = table.rows if isinstance(table, Table) else table
    headers = column_order(table, schema)

    lines = [",".join(_encode_cell(h) for h in headers)]
    for row in rows:
        lines.append(",".join(_encode_cell(row.get(h, "")) for h in headers))
    return "\n".join(lines)
