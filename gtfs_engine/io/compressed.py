"""Zip archive adapter: archive <-> {filename: text} bundles."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from gtfs_engine.core.config import IGNORED_ARCHIVE_PREFIXES


def read_bundle(
    path: Path,
    *,
    ignored_prefixes: tuple[str, ...] = IGNORED_ARCHIVE_PREFIXES,
) -> dict[str, bytes]:
    """Read every file member of a zip archive into memory.

    - directory entries are skipped
    - members whose name (or basename) starts with an ignored prefix are skipped
    - raises `zipfile.BadZipFile` / `OSError` when the archive is unreadable
    """
    path = Path(path)
    bundle: dict[str, bytes] = {}
    with ZipFile(path) as zf:
        for info in zf.infolist():
            name = info.filename
            if info.is_dir() or not name:
                continue
            if name.startswith(ignored_prefixes) or Path(name).name.startswith(ignored_prefixes):
                continue
            bundle[name] = zf.read(info)
    return bundle


def write_bundle(path: Path, bundle: Mapping[str, str | bytes]) -> Path:
    """Write a {filename: content} mapping to a deflated zip archive."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with ZipFile(path, "w", compression=ZIP_DEFLATED) as zf:
        for name, content in bundle.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            zf.writestr(name, data)
    return path
