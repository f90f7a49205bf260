"""Pydantic schema for configuration validation.

All config values are validated at startup. Typos and invalid values
fail fast with clear error messages.

Usage:
    from config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# FACTORY MODEL
# =============================================================================

class FactoryConfig(StrictModel):
    """Factory identity and administrator."""

    owner: str = Field(
        default="admin",
        min_length=1,
        description="Initial administrator identity"
    )
    address_label: str = Field(
        default="ifo_factory",
        min_length=1,
        description="Label the factory's chain address is derived from"
    )


# =============================================================================
# TEMPLATE MODELS
# =============================================================================

class TemplateConfig(StrictModel):
    """A code template: its code hash is derived from name and version."""

    name: str = Field(min_length=1, description="Template name")
    version: str = Field(default="1", min_length=1, description="Template version")


class TemplatesConfig(StrictModel):
    """Templates for both tranches."""

    public: TemplateConfig = Field(
        default_factory=lambda: TemplateConfig(name="PublicOffering")
    )
    private: TemplateConfig = Field(
        default_factory=lambda: TemplateConfig(name="PrivateOffering")
    )

    @model_validator(mode="after")
    def templates_distinct(self) -> "TemplatesConfig":
        """Both tranches share a salt, so their templates must differ."""
        if (self.public.name, self.public.version) == (self.private.name, self.private.version):
            raise ValueError("public and private templates must differ in name or version")
        return self


# =============================================================================
# CHAIN MODEL
# =============================================================================

class ChainConfig(StrictModel):
    """Simulated chain settings."""

    start_timestamp: int | None = Field(
        default=None,
        ge=0,
        description="Initial chain time in Unix seconds (default: wall clock)"
    )


# =============================================================================
# LOGGING MODEL
# =============================================================================

class LoggingConfig(StrictModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Python logging level"
    )
    output_file: str | None = Field(
        default=None,
        description="JSONL file for factory events (None keeps events in memory)"
    )
    default_recent: int = Field(
        default=50,
        gt=0,
        description="Default number of recent events to return"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


# =============================================================================
# QUERIES MODEL
# =============================================================================

class QueriesConfig(StrictModel):
    """Read-side defaults."""

    default_count: int = Field(
        default=10,
        gt=0,
        description="Records returned by an offerings query without a count"
    )


# =============================================================================
# ROOT CONFIG MODEL
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model.

    All fields have sensible defaults, so an empty config file is valid.
    """

    factory: FactoryConfig = Field(default_factory=FactoryConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    chain: ChainConfig = Field(default_factory=ChainConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    queries: QueriesConfig = Field(default_factory=QueriesConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Args:
        config_dict: Configuration as a dictionary.

    Returns:
        Validated AppConfig instance.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "AppConfig",
    "FactoryConfig",
    "TemplateConfig",
    "TemplatesConfig",
    "ChainConfig",
    "LoggingConfig",
    "QueriesConfig",
    "StrictModel",
    "load_validated_config",
    "validate_config_dict",
]
