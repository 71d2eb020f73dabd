"""Profit/loss view pipeline: open positions -> quotes -> portfolio roll-ups."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from portfolio_pnl.aggregation.engine import aggregate
from portfolio_pnl.config.schema import DEFAULT_FULL_POSITION
from portfolio_pnl.models.aggregate import PortfolioAggregate
from portfolio_pnl.models.position import Position
from portfolio_pnl.quotes.acquirer import QuoteAcquirer

log = structlog.get_logger("profit_loss_view")


def distinct_codes(positions: Iterable[Position]) -> list[str]:
    return sorted({p.code for p in positions})


async def build_profit_loss_view(
    positions: Iterable[Position],
    acquirer: QuoteAcquirer,
    full_position: float = DEFAULT_FULL_POSITION,
    force_synthetic: bool = False,
) -> list[PortfolioAggregate]:
    """Price every open position and roll the book up by portfolio."""
    open_positions = [p for p in positions if p.is_open]
    if not open_positions:
        log.info("profit_loss_view_empty")
        return []

    codes = distinct_codes(open_positions)
    quotes = await acquirer.acquire(codes, force_synthetic=force_synthetic)
    synthetic = sorted(code for code, q in quotes.items() if q.source == "synthetic")
    log.info(
        "quotes_acquired",
        codes=len(codes),
        live=len(quotes) - len(synthetic),
        synthetic=synthetic,
    )

    result = aggregate(open_positions, quotes, full_position)
    log.info(
        "profit_loss_view_built",
        portfolios=[p.portfolio for p in result],
        positions=len(open_positions),
    )
    return result
