"""Configuration management using pydantic-settings.

``Settings`` reads the environment (and ``.env``); ``ScrapingOptions`` and
``MigrationConfig`` validate the options handed to the pipeline components.
"""

from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.logging import LogLevel


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Source portfolio
    source_url: str = ""

    # Output locations
    public_dir: Path = Path("public")
    output_dir: Path = Path("migrated-content")

    # HTML fetching (seconds)
    fetch_timeout: float = 10.0
    fetch_retry_attempts: int = 3
    fetch_retry_delay: float = 1.0

    # Image downloads
    image_max_retries: int = 3

    # Run behaviour
    log_level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = "INFO"
    validate_data: bool = True

    @property
    def has_source(self) -> bool:
        """Check if a source portfolio URL is configured."""
        return bool(self.source_url)

    @property
    def run_log_level(self) -> LogLevel:
        """Get the configured level as a run log level."""
        return LogLevel[self.log_level]

    @property
    def backups_dir(self) -> Path:
        """Get the directory holding timestamped review dumps."""
        return self.output_dir / "backups"


class ScrapingOptions(BaseModel):
    """Validated options for the content extractor."""

    base_url: str = Field(min_length=1, description="Page to extract from")
    timeout: float = Field(default=10.0, gt=0, description="Per-attempt timeout (s)")
    retry_attempts: int = Field(default=3, ge=1, description="Fetch attempts")
    retry_delay: float = Field(default=1.0, ge=0, description="Base retry delay (s)")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got: {v!r}")
        return v

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "ScrapingOptions":
        """Build options from application settings."""
        values: dict[str, Any] = {
            "base_url": settings.source_url,
            "timeout": settings.fetch_timeout,
            "retry_attempts": settings.fetch_retry_attempts,
            "retry_delay": settings.fetch_retry_delay,
        }
        return cls(**(values | overrides))


class MigrationConfig(BaseModel):
    """Validated configuration for a full content migration run."""

    source_url: str = Field(min_length=1)
    output_dir: Path = Path("./migrated-content")
    log_level: LogLevel = LogLevel.INFO
    validate_data: bool = True
    scraping_options: dict[str, Any] = Field(default_factory=dict)

    def to_scraping_options(self) -> ScrapingOptions:
        """Merge ``scraping_options`` over the source URL."""
        return ScrapingOptions(**({"base_url": self.source_url} | self.scraping_options))

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "MigrationConfig":
        """Build a run configuration from application settings."""
        values: dict[str, Any] = {
            "source_url": settings.source_url,
            "output_dir": settings.output_dir,
            "log_level": settings.run_log_level,
            "validate_data": settings.validate_data,
            "scraping_options": {
                "timeout": settings.fetch_timeout,
                "retry_attempts": settings.fetch_retry_attempts,
                "retry_delay": settings.fetch_retry_delay,
            },
        }
        return cls(**(values | overrides))


# Global settings instance
settings = Settings()
