"""
Tests for the YAML application settings.
"""

import pytest
import yaml

from linuxblox.constants import DEFAULT_LAUNCH_COMMAND
from linuxblox.settings import (
    AppSettings,
    ConfigurationError,
    default_settings_path,
    load_settings,
    save_settings,
    settings_dir,
)


class TestSettingsDir:
    def test_prefers_xdg_config_home(self, tmp_path):
        env = {"XDG_CONFIG_HOME": str(tmp_path / "xdg"), "HOME": str(tmp_path / "home")}
        assert settings_dir(env) == tmp_path / "xdg" / "linuxblox"

    def test_falls_back_to_home(self, tmp_path):
        assert settings_dir({"HOME": str(tmp_path)}) == tmp_path / ".config" / "linuxblox"

    def test_no_location(self):
        with pytest.raises(ConfigurationError):
            settings_dir({})

    def test_default_settings_path(self, tmp_path):
        assert default_settings_path({"HOME": str(tmp_path)}).name == "settings.yaml"


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "settings.yaml")
        assert settings == AppSettings()
        assert settings.flags_key == "fflags"
        assert settings.launch_command == list(DEFAULT_LAUNCH_COMMAND)

    def test_values_loaded(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "config_path: /tmp/sober.json\n"
            "flags_key: FFlags\n"
            "launch_command: [echo, hi]\n"
            "log_level: DEBUG\n"
            "roblox_installed: true\n"
            "unknown_key: 3\n"
        )
        settings = load_settings(path)
        assert settings.config_path == "/tmp/sober.json"
        assert settings.flags_key == "FFlags"
        assert settings.launch_command == ["echo", "hi"]
        assert settings.log_level == "DEBUG"
        assert settings.roblox_installed is True
        assert settings.roblox_base_path is None

    @pytest.mark.parametrize("content", ["", "key: [unclosed", "- a\n- b\n"])
    def test_unusable_file_gives_defaults(self, tmp_path, content):
        path = tmp_path / "settings.yaml"
        path.write_text(content)
        assert load_settings(path) == AppSettings()

    @pytest.mark.parametrize(
        "content",
        ["roblox_installed: maybe\n", "launch_command: flatpak\n", "launch_command: []\n", "flags_key: ''\n"],
    )
    def test_wrong_types_rejected(self, tmp_path, content):
        path = tmp_path / "settings.yaml"
        path.write_text(content)
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_default_location_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "linuxblox").mkdir()
        (tmp_path / "linuxblox" / "settings.yaml").write_text("log_level: WARNING\n")
        assert load_settings().log_level == "WARNING"

    def test_no_location_gives_defaults(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.delenv("HOME", raising=False)
        assert load_settings() == AppSettings()


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "settings.yaml"
    settings = AppSettings(config_path="/x/config.json", roblox_installed=True, roblox_base_path="/opt/roblox")
    assert save_settings(settings, path) == path
    assert yaml.safe_load(path.read_text())["roblox_base_path"] == "/opt/roblox"
    assert load_settings(path) == settings
