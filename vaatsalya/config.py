"""Configuration management using Pydantic Settings."""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vaatsalya.llm import DEFAULT_BASE_URL, DEFAULT_MODEL

# XDG config directory for user configuration
XDG_CONFIG_PATH = Path.home() / ".config" / "vaatsalya"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=[
            XDG_CONFIG_PATH / "config.env",  # User config (lower priority)
            ".env",  # Project .env (higher priority)
        ],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gemini
    gemini_api_key: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY", "LLM_API_KEY"),
        description="API key for the Gemini generateContent endpoint",
    )
    gemini_model: str = Field(
        default=DEFAULT_MODEL,
        min_length=1,
        validation_alias=AliasChoices("GEMINI_MODEL", "LLM_MODEL"),
        description="Model identifier used by every assistant panel",
    )
    gemini_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices("GEMINI_BASE_URL"),
        description="Base URL that model identifiers are appended to",
    )

    # Retry and transport
    max_attempts: int = Field(default=3, ge=1, description="Attempts per generate call")
    request_timeout_seconds: float = Field(default=60.0, gt=0, description="Per-attempt HTTP timeout")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("gemini_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so model paths join cleanly."""
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"gemini_base_url must be an http(s) URL: {value!r}")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to an upper-case stdlib logging level name."""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}: {value!r}")
        return level

    @property
    def masked_api_key(self) -> str:
        """API key preview safe for terminal output."""
        if len(self.gemini_api_key) <= 8:
            return "***"
        return self.gemini_api_key[:4] + "..."


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
