"""
Application configuration loaded from environment variables.

Uses Pydantic Settings to:
1. Read from .env file automatically
2. Validate values at startup
3. Provide type-safe access throughout the app

Usage:
    from content_analyzer.config import settings
    print(settings.TEXT_MODEL)

Note: We use a validator that prefers .env values over empty shell
environment variables, so an exported-but-empty GEMINI_API_KEY does not
shadow the real key in the .env file.
"""

from dataclasses import dataclass

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ProviderConfig:
    """Read-only configuration handed to the content analysis provider.

    Built once at process start (see main.lifespan) and never mutated.
    """
    api_key: str
    video_analysis_model: str = "gemini-2.5-pro"
    report_model: str = "gemini-2.5-pro"
    text_model: str = "gemini-2.5-flash"
    thinking_budget: int = 24576


class Settings(BaseSettings):
    """All application configuration in one place."""

    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=True,     # ENV_VAR must match exactly
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def prefer_dotenv_over_empty_env(cls, data):
        """If an env var is empty but .env has a value, use the .env value.

        Pydantic Settings prioritizes real env vars over .env file values,
        even when the real env var is an empty string.
        """
        from dotenv import dotenv_values

        dotenv_vals = dotenv_values(".env")
        for key, dotenv_value in dotenv_vals.items():
            if dotenv_value and (key not in data or not data.get(key)):
                data[key] = dotenv_value
        return data

    # --- AI provider ---
    GEMINI_API_KEY: str = ""
    API_KEY: str = ""  # Legacy name, used when GEMINI_API_KEY is unset
    VIDEO_ANALYSIS_MODEL: str = "gemini-2.5-pro"
    REPORT_MODEL: str = "gemini-2.5-pro"
    TEXT_MODEL: str = "gemini-2.5-flash"
    THINKING_BUDGET: int = 24576

    # --- Uploads ---
    # Videos are sent inline with the request, which the API caps at ~20MB
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024

    # --- Application ---
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def api_key(self) -> str:
        return self.GEMINI_API_KEY or self.API_KEY

    def provider_config(self) -> ProviderConfig:
        """Freeze the provider-related settings into a ProviderConfig."""
        return ProviderConfig(
            api_key=self.api_key,
            video_analysis_model=self.VIDEO_ANALYSIS_MODEL,
            report_model=self.REPORT_MODEL,
            text_model=self.TEXT_MODEL,
            thinking_budget=self.THINKING_BUDGET,
        )


# Singleton instance — import this everywhere
settings = Settings()
