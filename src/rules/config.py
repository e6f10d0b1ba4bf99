from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "timecop.toml"

OutputFormat = Literal["text", "jsonl"]


class TimecopConfig(BaseModel):
    """Configuration for a timecop-check run."""

    model_config = ConfigDict(extra="forbid")

    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Ruby files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    format: OutputFormat = Field(
        default="text",
        description="Report format written to stdout",
    )

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def validate_patterns(cls, v: Any) -> Any:
        """Accept a single glob string as shorthand for a one-item list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> TimecopConfig:
    """Load configuration from timecop.toml if it exists."""
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, root)
        return TimecopConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return TimecopConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
