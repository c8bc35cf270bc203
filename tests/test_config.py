"""Tests for environment settings."""

from investigator.config import Settings, get_settings


class TestSettings:
    """Test INVESTIGATOR_* variables are read."""

    def test_defaults(self, monkeypatch):
        """Test defaults apply when nothing is set."""
        monkeypatch.delenv("INVESTIGATOR_LOG_LEVEL", raising=False)
        monkeypatch.delenv("INVESTIGATOR_CHAIN_DELIMITER", raising=False)
        assert get_settings() == Settings()

    def test_environment_overrides(self, monkeypatch):
        """Test variables override the defaults and log levels are upper-cased."""
        monkeypatch.setenv("INVESTIGATOR_LOG_LEVEL", "debug")
        monkeypatch.setenv("INVESTIGATOR_CHAIN_DELIMITER", "::")
        settings = get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.chain_delimiter == "::"
