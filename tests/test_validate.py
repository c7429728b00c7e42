from __future__ import annotations

from gtfs_engine.core.config import EngineSettings
from gtfs_engine.io import parse_table
from gtfs_engine.models.validate import Validator, validate_feed, validate_file


def _stop(**overrides):
    row = {"stop_id": "S1", "stop_name": "Main St", "stop_lat": "40.7", "stop_lon": "-74.0"}
    row.update(overrides)
    return row


def test_valid_rows_have_no_issues():
    report = validate_file("stops.txt", [_stop(), _stop(stop_id="S2")])
    assert report.ok
    assert report.errors == []
    assert report.warnings == []


def test_missing_required_field_reported_once_with_row_number():
    row = _stop()
    del row["stop_name"]
    report = validate_file("stops.txt", [_stop(), row])
    assert report.errors == ["stops.txt row 2: Missing required field 'stop_name'"]
    issue = report.issues[0]
    assert (issue.code, issue.row, issue.field) == ("missing_required_field", 2, "stop_name")


def test_empty_and_none_values_count_as_missing():
    report = validate_file("stops.txt", [_stop(stop_name=""), _stop(stop_id=None)])
    assert report.errors == [
        "stops.txt row 1: Missing required field 'stop_name'",
        "stops.txt row 2: Missing required field 'stop_id'",
    ]


def test_invalid_values_are_named():
    report = validate_file("stops.txt", [_stop(stop_lat="91", location_type="9")])
    assert report.errors == [
        "stops.txt row 1: Invalid value for 'stop_lat': '91'",
        "stops.txt row 1: Invalid value for 'location_type': '9'",
    ]
    assert report.issues[0].value == "91"


def test_empty_optional_values_are_not_checked():
    row = {
        "route_id": "R1",
        "route_short_name": "1",
        "route_long_name": "Main",
        "route_type": "3",
        "route_color": "",
        "route_url": "",
    }
    assert validate_file("routes.txt", [row]).ok


def test_every_row_is_checked():
    rows = [_stop(stop_lat="x"), _stop(), _stop(stop_lon="y")]
    report = validate_file("stops.txt", rows)
    assert report.errors == [
        "stops.txt row 1: Invalid value for 'stop_lat': 'x'",
        "stops.txt row 3: Invalid value for 'stop_lon': 'y'",
    ]


def test_unknown_file_is_a_single_warning():
    report = validate_file("notes.txt", [{"stop_lat": "999"}])
    assert report.errors == []
    assert report.warnings == ["Unknown file: notes.txt"]


def test_empty_required_file_short_circuits():
    report = validate_file("stops.txt", [])
    assert report.errors == ["Required file stops.txt is empty"]


def test_empty_optional_file_is_fine():
    assert validate_file("calendar.txt", []).ok


def test_malformed_lines_become_warnings():
    table = parse_table("stop_id,stop_name,stop_lat,stop_lon\nS1,Main,1,2\nS2,Oak\n")
    report = validate_file("stops.txt", table)
    assert report.ok
    assert report.warnings == [
        "stops.txt line 3: Dropped malformed line (field count does not match header)"
    ]

    quiet = Validator(settings=EngineSettings(warn_on_malformed_lines=False))
    assert quiet.validate_file("stops.txt", table).warnings == []


def test_validate_feed_two_file_scenario(two_file_bundle):
    tables = {name: parse_table(text, name) for name, text in two_file_bundle.items()}
    report = validate_feed(tables)
    assert report.errors == [
        "Missing required file: routes.txt",
        "Missing required file: trips.txt",
        "Missing required file: stop_times.txt",
    ]
    assert report.warnings == []


def test_validate_feed_uses_explicit_file_list():
    tables = {"stops.txt": [_stop()], "agency.txt": []}
    report = validate_feed(tables, files=["stops.txt"])
    assert "Missing required file: agency.txt" in report.errors
    assert "Required file agency.txt is empty" not in report.errors


def test_report_to_dict():
    report = validate_file("stops.txt", [_stop(stop_lat="x")])
    data = report.to_dict()
    assert data["errors"] == report.errors
    assert data["warnings"] == []
    assert data["issues"][0]["code"] == "invalid_value"
    assert data["issues"][0]["severity"] == "error"
