"""Tests for settings resolution."""
import config


class TestSettings:
    """Test environment overrides and defaults."""

    def test_defaults(self, monkeypatch) -> None:
        for env in ("SINKS_CONFIG_PATH", "SINKS_SCAN_TIMEOUT", "SINKS_SCAN_WORKERS"):
            monkeypatch.delenv(env, raising=False)

        settings = config.get_sinks_settings()

        assert settings["config_path"].endswith("config.json")
        assert settings["scan_timeout"] == 3.0
        assert settings["scan_workers"] == 8

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("SINKS_CONFIG_PATH", "/data/sinks.json")
        monkeypatch.setenv("SINKS_SCAN_TIMEOUT", "0.5")
        monkeypatch.setenv("SINKS_SCAN_WORKERS", "0")

        settings = config.get_sinks_settings()

        assert settings["config_path"] == "/data/sinks.json"
        assert settings["scan_timeout"] == 0.5
        assert settings["scan_workers"] == 1

    def test_unknown_key_uses_explicit_default(self) -> None:
        assert config.get_setting("nope", "fallback") == "fallback"
        assert config.get_setting("nope") == ""
