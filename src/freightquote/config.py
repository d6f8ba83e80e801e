"""
freightquote configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class FreightQuoteConfig(BaseModel):
    """Root configuration for freightquote."""

    # Currency settings
    reporting_currency: str = Field(default="PHP", description="Currency every line total is reported in")
    default_currency: str = Field(default="PHP", description="Currency of newly added line items")

    # Tax for quotations that carry no rate of their own (reporting only)
    tax_rate: float = Field(default=0.12, ge=0.0, le=1.0)

    # Category behaviour
    default_category_name: str = "New Category"
    unique_selling_category_names: bool = Field(
        default=True,
        description="Resolve or refuse case-insensitive name clashes in the selling price section",
    )
    prune_empty_categories: bool = Field(
        default=True,
        description="Drop a category when its last line item is removed",
    )

    log_level: str = Field(default="WARNING")

    @field_validator("reporting_currency", "default_currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> FreightQuoteConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # 2. Override from environment variables
        env_currency = os.environ.get("FREIGHTQUOTE_REPORTING_CURRENCY")
        env_tax = os.environ.get("FREIGHTQUOTE_TAX_RATE")
        env_level = os.environ.get("FREIGHTQUOTE_LOG_LEVEL")

        if env_currency:
            data["reporting_currency"] = env_currency
        if env_tax:
            data["tax_rate"] = env_tax
        if env_level:
            data["log_level"] = env_level

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
