from __future__ import annotations

import pytest

from gtfs_engine.models.times import (
    add_minutes_to_time,
    seconds_to_time,
    time_to_seconds,
    to_gtfs_time,
)


def test_to_gtfs_time():
    assert to_gtfs_time("08:30") == "08:30:00"
    assert to_gtfs_time("08:30:15") == "08:30:15"
    assert to_gtfs_time("8:30") == "08:30:00"
    assert to_gtfs_time("25:05:00") == "25:05:00"
    with pytest.raises(ValueError):
        to_gtfs_time("8h30")


def test_seconds_conversions():
    assert time_to_seconds("25:00:00") == 90000
    assert seconds_to_time(90061) == "25:01:01"
    with pytest.raises(ValueError):
        time_to_seconds("25:61:00")


def test_add_minutes_past_midnight():
    assert add_minutes_to_time("23:50:00", 20) == "24:10:00"
    assert add_minutes_to_time("08:00:30", 2) == "08:02:30"
