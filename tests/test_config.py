"""Tests for configuration loading."""

from pathlib import Path

import pytest

from horizon.config import DATA_FILE, Config, load_config


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv("HORIZON_DATA_FILE", raising=False)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()
        assert config.data_file == DATA_FILE

    def test_reads_values(self, tmp_path):
        conf = tmp_path / "horizon.conf"
        conf.write_text(
            "# Horizon settings\n"
            "DATA_FILE = /tmp/tasks.json\n"
            "DEFAULT_HORIZON = mid\n"
            'DEFAULT_PRIORITY = "high" # quoted\n'
            "SHORT_ID_LENGTH = 8\n"
        )
        config = load_config(conf)
        assert config.data_file == Path("/tmp/tasks.json")
        assert config.default_horizon == "mid"
        assert config.default_priority == "high"
        assert config.short_id_length == 8

    def test_inline_comment_unquoted(self, tmp_path):
        conf = tmp_path / "horizon.conf"
        conf.write_text("default_horizon = long # later\n")
        assert load_config(conf).default_horizon == "long"

    def test_expands_user(self, tmp_path):
        conf = tmp_path / "horizon.conf"
        conf.write_text("data_file = ~/todo/data.json\n")
        assert load_config(conf).data_file == Path.home() / "todo" / "data.json"

    def test_bad_short_id_length_keeps_default(self, tmp_path, caplog):
        conf = tmp_path / "horizon.conf"
        conf.write_text("short_id_length = six\n")
        config = load_config(conf)
        assert config.short_id_length == 6
        assert "SHORT_ID_LENGTH" in caplog.text

    def test_ignores_unknown_keys_and_junk(self, tmp_path):
        conf = tmp_path / "horizon.conf"
        conf.write_text("colour = blue\nnot a setting\n")
        assert load_config(conf) == Config()

    def test_env_overrides_data_file(self, tmp_path, monkeypatch):
        conf = tmp_path / "horizon.conf"
        conf.write_text("data_file = /tmp/from-conf.json\n")
        monkeypatch.setenv("HORIZON_DATA_FILE", str(tmp_path / "env.json"))
        assert load_config(conf).data_file == tmp_path / "env.json"
