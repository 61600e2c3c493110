"""Application configuration management."""

import os
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_ROOT = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_ROOT / "templates"
STATIC_DIR = PACKAGE_ROOT / "static"

LOG_LEVEL_ALIASES = {"WARN": "WARNING"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "SILENT"}


class Settings(BaseSettings):
    """Defaults for the CLI and library entry points, loaded from environment variables."""

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Server
    host: str = "127.0.0.1"
    port: int = 8888
    open_browser: bool = True

    # Reports
    default_sizes: Literal["stat", "parsed", "gzip"] = "parsed"
    report_filename: str = "report.html"
    json_report_filename: str = "report.json"

    # Watch mode
    watch_interval_seconds: float = 1.0

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="BUNDLESCOPE_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        pytest_flag = bool(os.getenv("PYTEST_CURRENT_TEST"))
        return self.environment == "testing" or pytest_flag

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept the CLI spellings (warn, silent) alongside stdlib level names."""
        level = v.strip().upper()
        level = LOG_LEVEL_ALIASES.get(level, level)
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level {v!r}. Must be one of: "
                f"{', '.join(sorted(name.lower() for name in VALID_LOG_LEVELS))}"
            )
        return level

    @field_validator("watch_interval_seconds")
    @classmethod
    def validate_watch_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("WATCH_INTERVAL_SECONDS must be greater than zero")
        return v


# Global settings instance
settings = Settings()
