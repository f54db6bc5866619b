"""Configuration loading and validation for sectionlinks."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from sectionlinks.core.errors import ConfigError
from sectionlinks.core.models import LayoutRule
from sectionlinks.layouts.decorators import default_layout_rules

DEFAULT_CONFIG_PATH = "~/.sectionlinks/config.yaml"


class MatchingConfig(BaseModel):
    """How section names are matched in text."""

    case_sensitive: bool = Field(default=True, description="Match names with exact case")
    full_match: bool = Field(default=True, description="Only match names as whole words")


class SectionLinksConfig(BaseModel):
    """Top-level sectionlinks configuration."""

    catalog_path: str = Field(description="Path to the YAML course catalog")
    base_url: str = Field(default="", description="Site root prepended to section URLs")
    log_level: str = Field(default="INFO", description="Logging level")
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    layouts: list[LayoutRule] = Field(
        default_factory=default_layout_rules,
        description="Layout rules, tried in order",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip the trailing slash so URLs join cleanly."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard logging level names only."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v!r}")
        return level


def load_config(path: str | None = None) -> SectionLinksConfig:
    """Load and validate configuration from a YAML file.

    Environment variable overrides:
        SECTIONLINKS_CATALOG_PATH: overrides catalog_path
        SECTIONLINKS_BASE_URL: overrides base_url

    Args:
        path: Path to config file. Defaults to ~/.sectionlinks/config.yaml.

    Returns:
        Validated SectionLinksConfig.

    Raises:
        ConfigError: If config file is missing, unreadable, or invalid.
    """
    config_path = Path(path or DEFAULT_CONFIG_PATH).expanduser()

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        raw = config_path.read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a YAML mapping")

    env_catalog = os.environ.get("SECTIONLINKS_CATALOG_PATH")
    if env_catalog:
        data["catalog_path"] = env_catalog

    env_base_url = os.environ.get("SECTIONLINKS_BASE_URL")
    if env_base_url:
        data["base_url"] = env_base_url

    # A relative catalog path is taken relative to the config file
    catalog_path = data.get("catalog_path")
    if isinstance(catalog_path, str) and not Path(catalog_path).expanduser().is_absolute():
        data["catalog_path"] = str(config_path.parent / catalog_path)

    try:
        return SectionLinksConfig(**data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
