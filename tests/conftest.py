from __future__ import annotations

from pathlib import Path
from zipfile import ZipFile

import pytest

from gtfs_engine.core.feed_store import FeedStore

AGENCY_TXT = (
    "agency_id,agency_name,agency_url,agency_timezone\n"
    "A1,Metro Transit,https://example.com,America/New_York\n"
)
STOPS_TXT = "stop_id,stop_name,stop_lat,stop_lon\nS1,Main St,40.7,-74.0\n"
ROUTES_TXT = "route_id,route_short_name,route_long_name,route_type\nR1,1,Main Line,3\n"
TRIPS_TXT = "route_id,service_id,trip_id\nR1,WK,T1\n"
STOP_TIMES_TXT = (
    "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
    "T1,08:00:00,08:00:00,S1,1\n"
    "T1,25:10:00,25:10:00,S1,2\n"
)


@pytest.fixture
def store() -> FeedStore:
    return FeedStore()


@pytest.fixture
def two_file_bundle() -> dict[str, str]:
    return {"agency.txt": AGENCY_TXT, "stops.txt": STOPS_TXT}


@pytest.fixture
def full_bundle(two_file_bundle) -> dict[str, str]:
    return {
        **two_file_bundle,
        "routes.txt": ROUTES_TXT,
        "trips.txt": TRIPS_TXT,
        "stop_times.txt": STOP_TIMES_TXT,
    }


@pytest.fixture
def make_archive(tmp_path):
    def _make(bundle: dict[str, str | bytes], name: str = "feed.zip") -> Path:
        path = tmp_path / name
        with ZipFile(path, "w") as zf:
            for member, content in bundle.items():
                zf.writestr(member, content)
        return path

    return _make
