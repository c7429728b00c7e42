from __future__ import annotations

import json
from zipfile import ZipFile

from gtfs_engine.cli import EXIT_INVALID, EXIT_OK, EXIT_UNREADABLE, main


def test_validate_clean_feed(full_bundle, make_archive, capsys):
    path = make_archive(full_bundle)
    assert main(["validate", str(path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "ERROR" not in out
    assert "files=5, errors=0, warnings=0" in out


def test_validate_reports_errors(two_file_bundle, make_archive, capsys, tmp_path):
    path = make_archive(two_file_bundle)
    report_path = tmp_path / "reports" / "report.json"
    assert main(["validate", str(path), "--report", str(report_path)]) == EXIT_INVALID

    out = capsys.readouterr().out
    assert "ERROR: Missing required file: routes.txt" in out
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert len(report["errors"]) == 3


def test_validate_strict_fails_on_warnings(full_bundle, make_archive):
    path = make_archive({**full_bundle, "notes.txt": "a\n1\n"})
    assert main(["validate", str(path)]) == EXIT_OK
    assert main(["validate", "--strict", str(path)]) == EXIT_INVALID


def test_validate_unreadable_archive(tmp_path, capsys):
    assert main(["validate", str(tmp_path / "nope.zip")]) == EXIT_UNREADABLE
    assert "error:" in capsys.readouterr().err


def test_export_and_new(full_bundle, make_archive, tmp_path):
    src = make_archive(full_bundle)
    out = tmp_path / "clean.zip"
    assert main(["export", str(src), str(out)]) == EXIT_OK
    with ZipFile(out) as zf:
        assert sorted(zf.namelist()) == sorted(full_bundle)

    starter = tmp_path / "starter.zip"
    assert main(["new", str(starter)]) == EXIT_OK
    with ZipFile(starter) as zf:
        assert "calendar.txt" in zf.namelist()
    assert main(["validate", str(starter)]) == EXIT_INVALID


def test_config_option(full_bundle, make_archive, tmp_path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("table_suffix: .csv\n", encoding="utf-8")
    path = make_archive(full_bundle)
    # with a .csv suffix nothing in the archive is a table
    assert main(["--config", str(cfg), "validate", str(path)]) == EXIT_INVALID
