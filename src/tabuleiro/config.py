"""Configuration management for the Tabuleiro rules engine using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tabuleiro.game.rules import RuleRevision


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="TABULEIRO_",
        extra="ignore",
    )

    # Rules
    default_rule_revision: RuleRevision = Field(
        default=RuleRevision.CURRENT,
        description="Rule revision used when a caller does not pick one",
    )

    # Roll history
    roll_history_size: int = Field(
        default=50, ge=1, description="Number of resolved rolls kept for display"
    )

    # Sheets
    sheets_dir: Path = Field(
        default=Path("./data/sheets"), description="Directory holding character sheet YAML files"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
