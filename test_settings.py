"""Settings persistence: values saved by one run are restored by the next."""

import json

import pytest

from settings import _DEFAULTS, load_settings, save_settings, settings_path


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setenv("MINI_DATE_PICKER_SETTINGS", str(path))
    return path


def test_path_honours_environment(settings_file):
    assert settings_path() == str(settings_file)


def test_first_launch_returns_defaults():
    assert load_settings() == _DEFAULTS


def test_saved_values_survive_restart():
    settings = load_settings()
    settings["min_date"] = "2024-01-10"
    settings["max_date"] = "2024-06-30"
    settings["date_placeholder"] = "Exam date"
    settings["log_level"] = "DEBUG"
    save_settings(settings)

    restored = load_settings()
    assert restored["min_date"] == "2024-01-10"
    assert restored["max_date"] == "2024-06-30"
    assert restored["date_placeholder"] == "Exam date"
    assert restored["log_level"] == "DEBUG"
    assert restored["time_placeholder"] == _DEFAULTS["time_placeholder"]


def test_wrong_types_fall_back_to_defaults(settings_file):
    settings_file.write_text(json.dumps({
        "min_date": 20240110,
        "date_placeholder": ["x"],
        "log_level": "LOUD",
        "export_dir": "/tmp/results",
    }))
    settings = load_settings()
    assert settings["min_date"] is None
    assert settings["date_placeholder"] == _DEFAULTS["date_placeholder"]
    assert settings["log_level"] == "INFO"
    assert settings["export_dir"] == "/tmp/results"


def test_empty_bound_means_none(settings_file):
    settings_file.write_text(json.dumps({"max_date": ""}))
    assert load_settings()["max_date"] is None


def test_corrupt_file_is_ignored(settings_file):
    settings_file.write_text("{not json")
    assert load_settings() == _DEFAULTS


def test_non_object_file_is_ignored(settings_file):
    settings_file.write_text("[1, 2, 3]")
    assert load_settings() == _DEFAULTS
