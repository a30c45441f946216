import json
import os

import pytest

import settings
from settings import data_dir, load_settings, save_settings


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "_SETTINGS_PATH", str(path))
    return path


def test_defaults_when_missing():
    loaded = load_settings()
    assert loaded == {
        "first_weekday": 6,
        "window_width": None,
        "window_height": None,
        "data_dir": None,
    }


def test_defaults_when_corrupt(settings_path):
    settings_path.write_text("{nope", encoding="utf-8")
    assert load_settings()["first_weekday"] == 6
    settings_path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings()["window_width"] is None


def test_round_trip(settings_path):
    save_settings({"first_weekday": 0, "window_width": 420, "window_height": 380,
                   "data_dir": "/tmp/counts"})
    assert json.loads(settings_path.read_text("utf-8"))["window_width"] == 420
    loaded = load_settings()
    assert loaded["first_weekday"] == 0
    assert (loaded["window_width"], loaded["window_height"]) == (420, 380)
    assert loaded["data_dir"] == "/tmp/counts"


def test_invalid_values_fall_back_per_key(settings_path):
    settings_path.write_text(json.dumps({
        "first_weekday": 9,
        "window_width": "wide",
        "window_height": 300,
        "data_dir": 5,
    }), encoding="utf-8")
    loaded = load_settings()
    assert loaded["first_weekday"] == 6
    assert loaded["window_width"] is None
    assert loaded["window_height"] == 300
    assert loaded["data_dir"] is None


def test_data_dir():
    assert data_dir({"data_dir": None}) == os.path.join(os.path.expanduser("~"), ".count-per-day")
    assert data_dir({"data_dir": "/srv/counts"}) == "/srv/counts"
