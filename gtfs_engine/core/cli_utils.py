"""Common CLI utilities for the gtfs-engine commands."""

from __future__ import annotations

import argparse
from typing import Any


def create_base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gtfs-engine", description=description)
    parser.add_argument(
        "--config",
        default=None,
        help="YAML settings file (table suffix, starter files, malformed-line warnings).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level (includes dropped CSV lines).",
    )
    return parser


def add_archive_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("archive", help="GTFS zip archive to read.")


def add_output_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("output", help="Zip archive to write.")


class RunSummary:
    """Simple container for counts reported at the end of a command."""

    def __init__(self) -> None:
        self.stats: dict[str, Any] = {}

    def update(self, step_stats: dict[str, Any]) -> None:
        self.stats.update(step_stats)

    def format(self) -> str:
        return ", ".join(f"{k}={v}" for k, v in self.stats.items())
