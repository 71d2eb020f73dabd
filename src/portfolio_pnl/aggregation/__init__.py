"""Position roll-ups: per-instrument and per-portfolio P/L."""

from portfolio_pnl.aggregation.closed_trades import summarize_closed_trades, to_closed_trade
from portfolio_pnl.aggregation.engine import aggregate, aggregate_instrument, aggregate_portfolio
from portfolio_pnl.aggregation.formulas import (
    BUY_BAND,
    SELL_BAND,
    exposure_ratio,
    holding_days,
    recommended_bands,
    safe_ratio,
)

__all__ = [
    "BUY_BAND",
    "SELL_BAND",
    "aggregate",
    "aggregate_instrument",
    "aggregate_portfolio",
    "exposure_ratio",
    "holding_days",
    "recommended_bands",
    "safe_ratio",
    "summarize_closed_trades",
    "to_closed_trade",
]
