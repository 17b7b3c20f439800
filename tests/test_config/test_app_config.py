"""Tests for application config loading."""

import pytest
import yaml

from chartable.config.loader import ConfigError, load_app_config, load_config, load_yaml
from chartable.config.models import AppConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CHARTABLE_DATA_URL", "CHARTABLE_DATA_PATH", "CHARTABLE_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, data):
    path = tmp_path / "chartable.yaml"
    path.write_text(yaml.dump(data))
    return path


class TestLoadYaml:
    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("port: [1, 2")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_yaml(path)

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml(path)


class TestLoadAppConfig:
    def test_defaults(self):
        config = load_app_config()
        assert config == AppConfig()
        assert config.default_page_size == 10
        assert config.request_timeout_s == 10.0
        assert config.data_url == ""

    def test_from_file(self, tmp_path):
        path = _write(tmp_path, {"port": 9000, "default_page_size": 25})
        config = load_app_config(path)
        assert config.port == 9000
        assert config.default_page_size == 25

    def test_validation_error(self, tmp_path):
        path = _write(tmp_path, {"default_page_size": 0})
        with pytest.raises(ConfigError, match="validation failed"):
            load_app_config(path)

    def test_file_is_validated_before_overrides(self, tmp_path):
        path = _write(tmp_path, {"port": 0})
        with pytest.raises(ConfigError, match="validation failed"):
            load_app_config(path, port=9000)

    def test_overrides_layer_on_file_fields(self, tmp_path, monkeypatch):
        path = _write(tmp_path, {"host": "0.0.0.0", "default_page_size": 25})
        monkeypatch.setenv("CHARTABLE_PAGE_SIZE", "oops")
        config = load_app_config(path, port=9001)
        assert config.host == "0.0.0.0"
        assert config.default_page_size == 25
        assert config.port == 9001

    def test_default_above_max(self, tmp_path):
        path = _write(tmp_path, {"default_page_size": 50, "max_page_size": 20})
        with pytest.raises(ConfigError):
            load_app_config(path)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = _write(tmp_path, {"data_url": "https://file.example/chars.json"})
        monkeypatch.setenv("CHARTABLE_DATA_URL", "https://env.example/chars.json")
        monkeypatch.setenv("CHARTABLE_DATA_PATH", str(tmp_path / "chars.json"))
        config = load_app_config(path)
        assert config.data_url == "https://env.example/chars.json"
        assert config.data_path == tmp_path / "chars.json"

    def test_env_page_size(self, monkeypatch):
        monkeypatch.setenv("CHARTABLE_PAGE_SIZE", "20")
        assert load_app_config().default_page_size == 20

    def test_invalid_env_page_size_keeps_default(self, monkeypatch):
        monkeypatch.setenv("CHARTABLE_PAGE_SIZE", "lots")
        assert load_app_config().default_page_size == 10

    def test_explicit_overrides_win(self, monkeypatch):
        monkeypatch.setenv("CHARTABLE_DATA_URL", "https://env.example/chars.json")
        config = load_app_config(None, data_url="https://cli.example/x.json", port=None)
        assert config.data_url == "https://cli.example/x.json"
        assert config.port == 8080


def test_load_config_generic(tmp_path):
    path = _write(tmp_path, {"host": "0.0.0.0"})
    assert load_config(path, AppConfig).host == "0.0.0.0"
