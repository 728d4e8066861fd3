"""
Configuration settings using Pydantic Settings.

Settings are loaded once at startup by the embedding application and passed
explicitly to whatever needs them. The scoring core itself takes no
configuration; these values drive logging and match ingestion only.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application Configuration
    app_env: str = Field("development", alias="APP_ENV")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    app_log_json: bool | None = Field(
        None,
        alias="APP_LOG_JSON",
        description="Force JSON (true) or console (false) logs; auto-detect from the TTY when unset",
    )

    # Match ingestion
    ranked_queue_id: int = Field(420, alias="RANKED_QUEUE_ID", description="Ranked Solo/Duo queue")
    match_max_age_hours: int = Field(
        4, ge=0, alias="MATCH_MAX_AGE_HOURS", description="Older completed matches are not scored"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"


def load_settings(**overrides: object) -> Settings:
    """Build a fresh Settings instance (init kwargs > environment > .env)."""
    return Settings(**overrides)  # type: ignore[arg-type]
