"""Command line entry point: validate, re-export or create GTFS archives.

Run:
  uv run gtfs-engine validate feed.zip
  uv run gtfs-engine export feed.zip cleaned.zip
  uv run gtfs-engine new starter.zip
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from gtfs_engine.core.cli_utils import (
    RunSummary,
    add_archive_arg,
    add_output_arg,
    create_base_parser,
)
from gtfs_engine.core.config import configure_logging, load_settings
from gtfs_engine.core.feed_store import FeedStore
from gtfs_engine.io import write_text

LOGGER = logging.getLogger("gtfs_engine.cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = create_base_parser("Validate and edit GTFS feed archives.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Validate an archive and print the report.")
    add_archive_arg(p_validate)
    p_validate.add_argument("--strict", action="store_true", help="Treat warnings as failures.")
    p_validate.add_argument("--report", default=None, help="Also write the report as JSON.")

    p_export = sub.add_parser("export", help="Re-serialise an archive with canonical columns.")
    add_archive_arg(p_export)
    add_output_arg(p_export)

    p_new = sub.add_parser("new", help="Write an empty starter feed.")
    add_output_arg(p_new)

    return parser.parse_args(argv)


def _load(store: FeedStore, archive: str) -> bool:
    result = store.load_archive(Path(archive))
    if not result.success:
        print(f"error: {result.error}", file=sys.stderr)
    return result.success


def _cmd_validate(store: FeedStore, args: argparse.Namespace) -> int:
    if not _load(store, args.archive):
        return EXIT_UNREADABLE

    report = store.validate()
    for message in report.errors:
        print(f"ERROR: {message}")
    for message in report.warnings:
        print(f"WARNING: {message}")

    if args.report:
        write_text(Path(args.report), json.dumps(report.to_dict(), ensure_ascii=False, indent=2))

    summary = RunSummary()
    summary.update({"files": len(store.get_file_list())})
    summary.update({"errors": len(report.errors), "warnings": len(report.warnings)})
    print(summary.format())

    if not report.ok or (args.strict and report.warnings):
        return EXIT_INVALID
    return EXIT_OK


def _cmd_export(store: FeedStore, args: argparse.Namespace) -> int:
    if not _load(store, args.archive):
        return EXIT_UNREADABLE
    out = store.export_archive(Path(args.output))
    LOGGER.info("Wrote %s", out)
    return EXIT_OK


def _cmd_new(store: FeedStore, args: argparse.Namespace) -> int:
    store.create_empty_feed()
    out = store.export_archive(Path(args.output))
    LOGGER.info("Wrote empty feed to %s", out)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    settings = load_settings(Path(args.config) if args.config else None)
    store = FeedStore(settings=settings)

    commands = {
        "validate": _cmd_validate,
        "export": _cmd_export,
        "new": _cmd_new,
    }
    return commands[args.command](store, args)


if __name__ == "__main__":
    sys.exit(main())
