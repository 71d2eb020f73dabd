"""Config loader — reads YAML, applies PORTFOLIO_* env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from portfolio_pnl.config.schema import AppConfig

# env var -> (section, key)
_ENV_OVERRIDES = {
    "PORTFOLIO_DATABASE_URL": ("database", "url"),
    "PORTFOLIO_LOG_LEVEL": ("logging", "level"),
    "PORTFOLIO_LOG_FORMAT": ("logging", "format"),
    "PORTFOLIO_QUOTE_URL": ("quotes", "base_url"),
    "PORTFOLIO_FULL_POSITION": ("aggregation", "full_position"),
    "PORTFOLIO_FORCE_SYNTHETIC": ("aggregation", "force_synthetic"),
}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        PORTFOLIO_DATABASE_URL     -> database.url
        PORTFOLIO_LOG_LEVEL        -> logging.level
        PORTFOLIO_LOG_FORMAT       -> logging.format
        PORTFOLIO_QUOTE_URL        -> quotes.base_url
        PORTFOLIO_FULL_POSITION    -> aggregation.full_position
        PORTFOLIO_FORCE_SYNTHETIC  -> aggregation.force_synthetic

    Values are passed through as strings; pydantic coerces numbers and
    booleans ("1", "true", "yes", ...) during validation.
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    for env_var, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data.setdefault(section, {})[key] = value

    return AppConfig.model_validate(data)
