"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    base_url: str = "http://localhost:8000"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def live_analysis_enabled(self) -> bool:
        """Whether a credential for live inference is configured."""
        return bool(self.openai_api_key and self.openai_api_key.strip())


def widget_domain(base_url: str) -> str:
    """Normalize the public origin used for the widget."""
    return base_url.strip().rstrip("/")
