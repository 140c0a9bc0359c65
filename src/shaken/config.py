"""Configuration management for Shaken."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shaken.core.types import DEFAULT_LEADER


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SHAKEN_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Identity
    identity: str = Field(default="shaken_bot", description="The bot's own user name")
    channels: list[str] = Field(default_factory=lambda: ["#shaken_bot"], description="Channels to join")
    leader: str = Field(default=DEFAULT_LEADER, description="Character that prefixes commands")

    # Custom responses
    commands_file: Path = Field(default=Path("commands.json"), description="Per-channel custom response store")

    # Text generation
    generate_host: str = Field(default="http://localhost:54612", description="Text generation service base URL")
    generate_timeout_ms: int = Field(default=1000, ge=0, description="Cooldown between passive generations")
    delay_lower_ms: int = Field(default=100, ge=0, description="Lower bound of the random reply delay")
    delay_upper_ms: int = Field(default=3000, ge=0, description="Upper bound of the random reply delay")
    ignore_chance: float = Field(default=0.25, ge=0.0, le=1.0, description="Chance to skip a passive generation")
    http_timeout_seconds: float = Field(default=10.0, gt=0, description="Timeout for outgoing HTTP requests")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("leader")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("leader must be a single character")
        return value


def load_settings(workspace_path: Path | None = None) -> Settings:
    """Load settings from the environment and ``<workspace>/.env``."""

    if workspace_path is None:
        return Settings()
    settings = Settings(_env_file=workspace_path / ".env")  # type: ignore[call-arg]
    if not settings.commands_file.is_absolute():
        settings = settings.model_copy(update={"commands_file": workspace_path / settings.commands_file})
    return settings
