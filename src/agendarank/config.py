"""Configuration settings using pydantic-settings for environment variable loading."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Variables are prefixed with ``AGENDARANK_`` and may also come from a
    ``.env`` file. Command-line flags take precedence over both.
    """

    model_config = SettingsConfigDict(
        env_prefix="AGENDARANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Ranked importer output, relative to the working directory
    output_path: Path = Path("output.csv")

    # Text encoding used for every input and output file
    encoding: str = "utf-8"

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
