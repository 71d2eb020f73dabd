"""Configuration schema — pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_FULL_POSITION = 50000.0


class QuoteProviderConfig(BaseModel):
    base_url: str = "http://qt.gtimg.cn"
    timeout_s: float = Field(default=10.0, gt=0)
    max_concurrency: int = Field(default=8, ge=1)
    # The provider answers in GBK regardless of the Content-Type header.
    encoding: str = "gbk"


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///positions.db"


class AggregationConfig(BaseModel):
    # Capital treated as a 100% allocated single instrument.
    full_position: float = Field(default=DEFAULT_FULL_POSITION, ge=0)
    force_synthetic: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class AppConfig(BaseModel):
    quotes: QuoteProviderConfig = Field(default_factory=QuoteProviderConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
