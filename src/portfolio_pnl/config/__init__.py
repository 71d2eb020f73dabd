"""Configuration system."""

from portfolio_pnl.config.loader import load_config
from portfolio_pnl.config.schema import AppConfig

__all__ = ["AppConfig", "load_config"]
