"""Tests for wsg_check.config - layered settings resolution."""

from __future__ import annotations

import json

import pytest

from wsg_check.config import CONFIG_FILE_NAMES, Settings, load_settings
from wsg_check.services.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Drop any WSG_* variables so the host environment cannot leak in."""
    for name in Settings.__dataclass_fields__:
        monkeypatch.delenv(f"WSG_{name}", raising=False)


def _write_config(directory, data, name: str = CONFIG_FILE_NAMES[0]):
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestDefaults:

    def test_defaults_without_sources(self, tmp_path):
        s = load_settings(config_dir=str(tmp_path))
        assert s.FORMAT == "terminal"
        assert s.FAIL_THRESHOLD == 0
        assert s.CATEGORIES == ["ux", "web-dev", "hosting", "business"]
        assert s.GUIDELINES == []
        assert s.RESPECT_ROBOTS is True


class TestSources:

    def test_config_file_is_read(self, tmp_path):
        _write_config(tmp_path, {"format": "json", "fail-threshold": 70, "categories": ["ux"]})
        s = load_settings(config_dir=str(tmp_path))
        assert s.FORMAT == "json"
        assert s.FAIL_THRESHOLD == 70
        assert s.CATEGORIES == ["ux"]

    def test_alternate_config_file_name(self, tmp_path):
        _write_config(tmp_path, {"timeout": 5}, name=CONFIG_FILE_NAMES[1])
        assert load_settings(config_dir=str(tmp_path)).TIMEOUT == 5.0

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        _write_config(tmp_path, {"format": "json"})
        monkeypatch.setenv("WSG_FORMAT", "markdown")
        monkeypatch.setenv("WSG_RESPECT_ROBOTS", "false")
        monkeypatch.setenv("WSG_GUIDELINES", "3.1, 4.2")
        s = load_settings(config_dir=str(tmp_path))
        assert s.FORMAT == "markdown"
        assert s.RESPECT_ROBOTS is False
        assert s.GUIDELINES == ["3.1", "4.2"]

    def test_overrides_beat_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WSG_FAIL_THRESHOLD", "20")
        s = load_settings({"FAIL_THRESHOLD": 80, "CATEGORIES": "ux,hosting"}, str(tmp_path))
        assert s.FAIL_THRESHOLD == 80
        assert s.CATEGORIES == ["ux", "hosting"]

    def test_none_override_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WSG_FORMAT", "html")
        s = load_settings({"FORMAT": None}, str(tmp_path))
        assert s.FORMAT == "html"

    def test_unknown_keys_are_ignored(self, tmp_path):
        _write_config(tmp_path, {"colour": "green"})
        assert load_settings(config_dir=str(tmp_path)).FORMAT == "terminal"


class TestValidation:

    def test_unknown_category(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_settings({"CATEGORIES": "ux,marketing"}, str(tmp_path))
        assert exc_info.value.field == "CATEGORIES"

    def test_threshold_out_of_range(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings({"FAIL_THRESHOLD": 101}, str(tmp_path))

    def test_threshold_not_a_number(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_settings({"FAIL_THRESHOLD": "high"}, str(tmp_path))
        assert exc_info.value.field == "FAIL_THRESHOLD"

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings({"FORMAT": "pdf"}, str(tmp_path))

    def test_non_positive_timeout(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WSG_TIMEOUT", "0")
        with pytest.raises(ConfigError):
            load_settings(config_dir=str(tmp_path))

    def test_malformed_config_file(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAMES[0]).write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_settings(config_dir=str(tmp_path))

    def test_config_file_must_be_object(self, tmp_path):
        _write_config(tmp_path, ["ux"])
        with pytest.raises(ConfigError):
            load_settings(config_dir=str(tmp_path))
