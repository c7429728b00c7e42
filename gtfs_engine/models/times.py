"""GTFS service-time helpers.

Service times are measured from noon minus 12h of the service day, so hours
may exceed 23 (e.g. `25:10:00` for a trip running past midnight).
"""

from __future__ import annotations

from gtfs_engine.models.rules import is_time


def time_to_seconds(value: str) -> int:
    """Convert `H:MM:SS` / `HH:MM:SS` / `HHH:MM:SS` to seconds since service-day start."""
    if not is_time(value):
        raise ValueError(f"not a GTFS time: {value!r}")
    hours, minutes, seconds = (int(p) for p in value.split(":"))
    return hours * 3600 + minutes * 60 + seconds


def seconds_to_time(total: int) -> str:
    if total < 0:
        raise ValueError(f"negative service time: {total}")
    hours, rest = divmod(int(total), 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def to_gtfs_time(value: str) -> str:
    """Normalise a clock entry (`H:MM`, `HH:MM` or `HH:MM:SS`) to zero-padded `HH:MM:SS`."""
    parts = value.strip().split(":")
    if len(parts) == 2:
        parts.append("00")
    candidate = ":".join(parts)
    if not is_time(candidate):
        raise ValueError(f"not a clock time: {value!r}")
    hours, minutes, seconds = candidate.split(":")
    return f"{hours.zfill(2)}:{minutes}:{seconds}"


def add_minutes_to_time(value: str, minutes: int) -> str:
    """Shift a GTFS time by whole minutes; hours keep counting past 24."""
    return seconds_to_time(time_to_seconds(value) + minutes * 60)
