import json

import pytest

import fitlog2tcx.appconfig as appconfig
from fitlog2tcx.appconfig import DEFAULT_CONFIG, load_config, save_config


def test_defaults_without_config_file():
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_file_values_override_defaults(monkeypatch, tmp_path):
    path = tmp_path / "fitlog2tcx_config.json"
    path.write_text(json.dumps({"include_creator": True, "marker_indexing": "corrected"}))
    monkeypatch.setattr(appconfig, "_FILE_PATHS", [tmp_path / "absent.json", path])

    config = load_config()

    assert config["include_creator"] is True
    assert config["marker_indexing"] == "corrected"
    assert config["debug"] is False


def test_environment_variable_selects_file(monkeypatch, tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"debug": True}))
    monkeypatch.setenv(appconfig.CONFIG_ENV_VAR, str(path))

    assert load_config()["debug"] is True


def test_invalid_marker_indexing(monkeypatch, tmp_path):
    path = tmp_path / "fitlog2tcx_config.json"
    path.write_text(json.dumps({"marker_indexing": "off-by-two"}))
    monkeypatch.setattr(appconfig, "_FILE_PATHS", [path])

    with pytest.raises(ValueError, match="marker_indexing"):
        load_config()


def test_invalid_json_propagates(monkeypatch, tmp_path):
    path = tmp_path / "fitlog2tcx_config.json"
    path.write_text("{not json")
    monkeypatch.setattr(appconfig, "_FILE_PATHS", [path])

    with pytest.raises(ValueError):
        load_config()


def test_save_config_round_trips(monkeypatch, tmp_path):
    path = tmp_path / "fitlog2tcx_config.json"
    monkeypatch.setattr(appconfig, "_FILE_PATHS", [path])

    written = save_config({**DEFAULT_CONFIG, "tcx_namespace": True})

    assert written == path
    assert load_config()["tcx_namespace"] is True
