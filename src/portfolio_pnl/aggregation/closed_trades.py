"""Realised P/L over CLOSED positions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from portfolio_pnl.aggregation.formulas import holding_days
from portfolio_pnl.models.aggregate import ClosedTrade, ClosedTradesStatistics, ClosedTradesSummary
from portfolio_pnl.models.position import Position


def to_closed_trade(position: Position) -> ClosedTrade:
    """Convert a CLOSED position into its realised-trade view."""
    pnl = position.realised_profit_loss()
    rate = position.realised_profit_loss_rate()
    if pnl is None or rate is None or position.sell_price is None or position.sell_date is None:
        raise ValueError(f"position {position.id} is not closed")
    return ClosedTrade(
        id=position.id,
        code=position.code,
        name=position.name,
        portfolio=position.portfolio,
        buy_date=position.buy_date,
        buy_price=position.buy_price,
        sell_date=position.sell_date,
        sell_price=position.sell_price,
        quantity=position.quantity,
        profit_loss=pnl,
        profit_loss_rate=rate,
        holding_days=holding_days(position.buy_date, position.sell_date),
        parent_id=position.parent_id,
    )


def _statistics(trades: Sequence[ClosedTrade]) -> ClosedTradesStatistics:
    total = len(trades)
    if total == 0:
        return ClosedTradesStatistics()

    pnls = [t.profit_loss for t in trades]
    profitable = sum(1 for pnl in pnls if pnl > 0)
    return ClosedTradesStatistics(
        total_trades=total,
        profitable_trades=profitable,
        loss_trades=sum(1 for pnl in pnls if pnl < 0),
        win_rate=profitable / total,
        total_profit_loss=sum(pnls),
        average_profit_loss_rate=sum(t.profit_loss_rate for t in trades) / total,
        max_profit=max(pnls),
        max_loss=min(pnls),
        average_holding_days=sum(t.holding_days for t in trades) / total,
    )


def summarize_closed_trades(positions: Iterable[Position]) -> ClosedTradesSummary:
    """Closed trades newest sale first, plus book-wide statistics.

    Open positions in the input are skipped.
    """
    trades = [to_closed_trade(p) for p in positions if p.is_closed]
    trades.sort(key=lambda t: t.sell_date, reverse=True)
    return ClosedTradesSummary(trades=trades, statistics=_statistics(trades))
