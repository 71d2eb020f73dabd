"""Pydantic domain models."""

from portfolio_pnl.models.aggregate import (
    ClosedTrade,
    ClosedTradesStatistics,
    ClosedTradesSummary,
    InstrumentAggregate,
    PortfolioAggregate,
    TradeProfitLoss,
)
from portfolio_pnl.models.position import Position, PositionStatus
from portfolio_pnl.models.quote import Quote

__all__ = [
    "ClosedTrade",
    "ClosedTradesStatistics",
    "ClosedTradesSummary",
    "InstrumentAggregate",
    "PortfolioAggregate",
    "Position",
    "PositionStatus",
    "Quote",
    "TradeProfitLoss",
]
