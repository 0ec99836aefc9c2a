"""Tests for the layered configuration manager."""

import pytest
import yaml

from vetria.shared.core.configuration import ConfigManager, SystemConfig, ValidationLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "VETRIA_DB_PATH",
        "ACCESS_GATE_ENABLED",
        "ACCESS_GATE_URL",
        "ACCESS_GATE_TIMEOUT",
        "FLET_WEB_MODE",
        "FLET_PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_bundled_defaults_load():
    config = ConfigManager().get_config()

    assert config.storage.db_path == "data/db/vetria.duckdb"
    assert config.access_gate.enabled is False
    assert config.ui.app_title == "Stylish Glass"


def test_missing_directory_uses_model_defaults(tmp_path):
    assert ConfigManager(tmp_path / "absent").get_config() == SystemConfig()


def test_project_overrides_user(tmp_path):
    write_yaml(tmp_path / "user.yaml", {"ui": {"flet_port": 9000, "theme_mode": "light"}})
    write_yaml(tmp_path / "project.yaml", {"ui": {"flet_port": 9100}})

    config = ConfigManager(tmp_path).get_config()

    assert config.ui.flet_port == 9100
    assert config.ui.theme_mode == "light"


def test_environment_wins(tmp_path, monkeypatch):
    write_yaml(tmp_path / "project.yaml", {"access_gate": {"enabled": False}})
    monkeypatch.setenv("ACCESS_GATE_ENABLED", "true")
    monkeypatch.setenv("ACCESS_GATE_URL", "https://gate.example.test")
    monkeypatch.setenv("ACCESS_GATE_TIMEOUT", "3.5")
    monkeypatch.setenv("VETRIA_DB_PATH", str(tmp_path / "x.duckdb"))

    config = ConfigManager(tmp_path).get_config()

    assert config.access_gate.enabled is True
    assert config.access_gate.endpoint_url == "https://gate.example.test"
    assert config.access_gate.timeout_seconds == 3.5
    assert config.storage.db_path == str(tmp_path / "x.duckdb")


def test_unparsable_env_value_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("FLET_PORT", "eighty")
    assert ConfigManager(tmp_path).get_config().ui.flet_port == 8550


def test_strict_rejects_invalid_values(tmp_path):
    write_yaml(tmp_path / "project.yaml", {"access_gate": {"timeout_seconds": 0}})
    with pytest.raises(ValueError):
        ConfigManager(tmp_path).get_config(ValidationLevel.STRICT)


def test_lenient_falls_back_to_defaults(tmp_path):
    write_yaml(tmp_path / "project.yaml", {"ui": {"unknown_option": True}})
    assert ConfigManager(tmp_path).get_config(ValidationLevel.LENIENT) == SystemConfig()

