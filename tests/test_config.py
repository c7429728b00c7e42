from __future__ import annotations

import pytest

from gtfs_engine.core.config import DEFAULT_SETTINGS, EngineSettings, load_settings


def test_defaults():
    assert load_settings() is DEFAULT_SETTINGS
    assert DEFAULT_SETTINGS.table_suffix == ".txt"
    assert DEFAULT_SETTINGS.starter_optional_files == ("calendar.txt", "shapes.txt")
    assert DEFAULT_SETTINGS.warn_on_malformed_lines


def test_load_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "starter_optional_files:\n  - calendar.txt\n  - feed_info.txt\nwarn_on_malformed_lines: false\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings == EngineSettings(
        starter_optional_files=("calendar.txt", "feed_info.txt"),
        warn_on_malformed_lines=False,
    )


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_rejects_unknown_keys_and_non_mappings(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unknown settings"):
        load_settings(bad)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(listing)
