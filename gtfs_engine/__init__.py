"""GTFS feed data engine.

Load a feed from text tables, edit rows in place, validate against the GTFS
schema registry and re-serialise:

- `gtfs_engine.io`: CSV codec and zip bundle helpers
- `gtfs_engine.models`: schema registry, field rules, validation
- `gtfs_engine.core.feed_store`: the in-memory `FeedStore`
"""

from __future__ import annotations

from gtfs_engine.core.feed_store import Feed, FeedStore, LoadResult, export_tables
from gtfs_engine.io import Table, parse_table, serialize_table
from gtfs_engine.models import GTFS_SPEC, ValidationReport, validate_feed, validate_file

__all__ = [
    "GTFS_SPEC",
    "Feed",
    "FeedStore",
    "LoadResult",
    "Table",
    "ValidationReport",
    "export_tables",
    "parse_table",
    "serialize_table",
    "validate_feed",
    "validate_file",
]
