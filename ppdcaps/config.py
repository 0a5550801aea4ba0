"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from ppdcaps.schemas import DEFAULT_LOCALE


class Settings(BaseSettings):
    """Settings loaded from PPDCAPS_* environment variables or a .env file.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        locale: Locale attached to display strings in the descriptor.
        vendor_capabilities: Include unrecognized option groups as vendor
            capabilities.
        cups_server: CUPS server to read PPDs from (None = local default).
    """

    model_config = SettingsConfigDict(
        env_prefix="PPDCAPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    locale: str = DEFAULT_LOCALE
    vendor_capabilities: bool = True
    cups_server: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Current settings.
    """
    return Settings()
