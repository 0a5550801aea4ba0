"""Tests for settings loading."""

from ppdcaps.config import Settings, get_settings


class TestSettings:
    """Tests for PPDCAPS_* settings."""

    def test_defaults(self, monkeypatch):
        """Defaults apply without environment variables."""
        for name in ("LOG_LEVEL", "LOCALE", "VENDOR_CAPABILITIES", "CUPS_SERVER"):
            monkeypatch.delenv(f"PPDCAPS_{name}", raising=False)
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.locale == "EN"
        assert settings.vendor_capabilities is True
        assert settings.cups_server is None

    def test_environment_overrides(self, monkeypatch):
        """Prefixed environment variables override defaults."""
        monkeypatch.setenv("PPDCAPS_LOCALE", "FR")
        monkeypatch.setenv("PPDCAPS_VENDOR_CAPABILITIES", "0")
        monkeypatch.setenv("PPDCAPS_CUPS_SERVER", "print.example.org:631")
        settings = Settings(_env_file=None)

        assert settings.locale == "FR"
        assert settings.vendor_capabilities is False
        assert settings.cups_server == "print.example.org:631"

    def test_case_insensitive(self, monkeypatch):
        """Variable names are matched case-insensitively."""
        monkeypatch.setenv("ppdcaps_log_level", "DEBUG")

        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_env_file(self, tmp_path, monkeypatch):
        """Values can come from a .env file."""
        monkeypatch.delenv("PPDCAPS_LOCALE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("PPDCAPS_LOCALE=IT\nOTHER_SETTING=1\n")

        assert Settings(_env_file=env_file).locale == "IT"

    def test_get_settings_cached(self):
        """get_settings returns one shared instance."""
        assert get_settings() is get_settings()
