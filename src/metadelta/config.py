"""Configuration settings for Metadelta.

Precedence: CLI flags > environment (``METADELTA_*``) > ``.env`` > defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from metadelta.rules.table import RuleTable


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="METADELTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Version marker written into package manifests
    api_version: str = "58.0"

    # Optional YAML type rule table replacing the packaged default
    rules_file: Path | None = Field(default=None)

    # JSONL run logs are written here when set
    log_dir: Path | None = Field(default=None)

    # Source directory inside a package
    package_root: str = "force-app/main/default"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None


def load_rules(settings: Settings | None = None, rules_file: str | Path | None = None) -> RuleTable:
    """Resolve the type rule table: explicit file > settings file > packaged default."""
    settings = settings or get_settings()
    path = rules_file or settings.rules_file
    if path:
        return RuleTable.from_yaml(path)
    return RuleTable.default()
