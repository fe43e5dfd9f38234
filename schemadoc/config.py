# schemadoc/config.py
"""
schemadoc configuration - single source of truth via Pydantic Settings.

Resolution order: CLI flags > env vars (SCHEMADOC_*) > .env file > defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemadocConfig(BaseSettings):
    """Central configuration for schemadoc."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMADOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Output ---
    output_format: Literal["json", "yaml"] = "json"
    json_indent: int = Field(2, ge=0)

    # --- Validation ---
    # Dangling $ref targets are emitted as-is unless this is set.
    strict_references: bool = False

    # --- Logging ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    # --- Paths ---
    home_dir: Path = Field(default_factory=lambda: Path.home() / ".schemadoc")

    # Defaults to home_dir / "logs".
    log_dir: Optional[Path] = None

    @model_validator(mode="after")
    def _default_log_dir(self) -> "SchemadocConfig":
        if self.log_dir is None:
            self.log_dir = self.home_dir / "logs"
        return self


@lru_cache(maxsize=1)
def get_config() -> SchemadocConfig:
    """Return the global config singleton."""
    return SchemadocConfig()
