"""Configuration management for duet."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DUET_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Completion provider
    api_key: Optional[str] = Field(
        None,
        description="API key for the completion provider",
        validation_alias=AliasChoices("DUET_API_KEY", "OPENAI_API_KEY"),
    )
    api_base: Optional[str] = Field(None, description="Optional API base URL")
    request_timeout_seconds: Optional[float] = Field(
        default=60.0, description="Timeout enforced by the provider SDK per request"
    )

    # Agent roles
    planner_model: str = Field(default="gpt-4o", description="Model used by the planning agent")
    planner_temperature: float = Field(default=1.0, description="Sampling temperature for planning")
    speaker_model: str = Field(default="gpt-4o", description="Model used by the speaking agent")
    speaker_temperature: float = Field(default=1.0, description="Sampling temperature for replies")

    # Orchestration
    max_turns: int = Field(default=3, ge=1, description="Maximum planner calls per chat")
    step_timeout_seconds: Optional[float] = Field(
        default=60.0, description="Upper bound for each planner, speaker or action await"
    )

    # Search
    search_max_results: int = Field(default=5, ge=1, description="Results requested per web search")
    search_timeout_seconds: float = Field(default=15.0, description="Timeout for one web search")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")


def get_settings(**overrides: object) -> Settings:
    """Get application settings.

    Args:
        overrides: Explicit field values taking precedence over the environment

    Returns:
        Settings instance
    """
    return Settings(**overrides)  # type: ignore[arg-type]
