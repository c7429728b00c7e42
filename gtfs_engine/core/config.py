"""Engine configuration (file conventions, settings file, logging)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

# Only archive members with this suffix are treated as tables.
TABLE_SUFFIX: str = ".txt"

# Optional files seeded alongside the required ones when authoring a new feed.
STARTER_OPTIONAL_FILES: tuple[str, ...] = ("calendar.txt", "shapes.txt")

# macOS archive metadata
IGNORED_ARCHIVE_PREFIXES: tuple[str, ...] = ("__MACOSX/", "._")


@dataclass(frozen=True)
class EngineSettings:
    table_suffix: str = TABLE_SUFFIX
    starter_optional_files: tuple[str, ...] = STARTER_OPTIONAL_FILES
    ignored_archive_prefixes: tuple[str, ...] = IGNORED_ARCHIVE_PREFIXES
    # Report dropped CSV records as warnings (they are dropped either way).
    warn_on_malformed_lines: bool = True


DEFAULT_SETTINGS = EngineSettings()


def load_settings(path: Path | None = None) -> EngineSettings:
    """Load engine settings from a YAML file, falling back to defaults.

    The file is a flat mapping of `EngineSettings` field names; sequences are
    converted to tuples. Unknown keys raise `ValueError`.
    """
    if path is None:
        return DEFAULT_SETTINGS

    raw: Any = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: settings file must contain a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(EngineSettings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{path}: unknown settings: {unknown}")

    values = {k: tuple(v) if isinstance(v, list) else v for k, v in raw.items()}
    return EngineSettings(**values)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
