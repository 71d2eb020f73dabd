"""Aggregation engine — open positions + quotes -> ordered portfolio roll-ups.

Output ordering is explicit rather than inherited from dict iteration:
portfolios by name ascending; inside a portfolio, codes are visited in
ascending order and then stably sorted by cost-exposure ratio descending;
inside an instrument, trades run newest buy date first.

A code with no quote is dropped from its portfolio entirely. It adds
nothing to cost, exposure or P/L at either level.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

import structlog

from portfolio_pnl.aggregation.formulas import exposure_ratio, recommended_bands, safe_ratio
from portfolio_pnl.config.schema import DEFAULT_FULL_POSITION
from portfolio_pnl.models.aggregate import InstrumentAggregate, PortfolioAggregate, TradeProfitLoss
from portfolio_pnl.models.position import Position
from portfolio_pnl.models.quote import Quote

log = structlog.get_logger("aggregation")


def _group_by(positions: Iterable[Position], key: str) -> dict[str, list[Position]]:
    groups: dict[str, list[Position]] = defaultdict(list)
    for position in positions:
        groups[getattr(position, key)].append(position)
    return groups


def aggregate_instrument(
    code: str,
    quote: Quote,
    positions: Sequence[Position],
    full_position: float = DEFAULT_FULL_POSITION,
) -> InstrumentAggregate:
    """Roll up the open lots of one code inside one portfolio."""
    trades = [TradeProfitLoss.from_position(p, quote.price) for p in positions]
    trades.sort(key=lambda t: t.buy_date, reverse=True)

    total_cost = sum(t.position_cost for t in trades)
    total_quantity = sum(t.quantity for t in trades)
    total_pnl = sum(t.profit_loss for t in trades)

    last_buy_price = trades[0].buy_price if trades else 0.0
    buy_point, sell_point = recommended_bands(last_buy_price)

    return InstrumentAggregate(
        code=code,
        name=quote.name,
        price=quote.price,
        trades=trades,
        total_quantity=total_quantity,
        total_cost=total_cost,
        profit_loss=total_pnl,
        profit_loss_rate=safe_ratio(total_pnl, total_cost),
        cost_exposure_ratio=exposure_ratio(total_cost, full_position),
        current_exposure_ratio=exposure_ratio(quote.price * total_quantity, full_position),
        recommended_buy_point=buy_point,
        recommended_sell_point=sell_point,
    )


def aggregate_portfolio(
    portfolio: str,
    instruments: Sequence[InstrumentAggregate],
    full_position: float = DEFAULT_FULL_POSITION,
) -> PortfolioAggregate:
    """Portfolio totals.

    Total cost is rebuilt from each instrument's cost-exposure ratio times the
    full position, not summed from ``total_cost``. The two agree whenever
    ``full_position`` is non-zero; when it is zero, both the ratios and the
    portfolio cost collapse to 0.
    """
    ordered = sorted(instruments, key=lambda i: i.cost_exposure_ratio, reverse=True)
    total_cost = sum(i.cost_exposure_ratio * full_position for i in ordered)
    total_pnl = sum(i.profit_loss for i in ordered)
    return PortfolioAggregate(
        portfolio=portfolio,
        full_position=full_position,
        instruments=ordered,
        total_cost=total_cost,
        total_profit_loss=total_pnl,
        profit_loss_rate=safe_ratio(total_pnl, total_cost),
    )


def aggregate(
    positions: Iterable[Position],
    quotes: Mapping[str, Quote],
    full_position: float = DEFAULT_FULL_POSITION,
) -> list[PortfolioAggregate]:
    """Roll open positions up into one PortfolioAggregate per portfolio.

    CLOSED positions are ignored, so callers may pass either the full book or
    a pre-filtered list. Never raises for empty input; returns ``[]``.
    """
    open_positions = [p for p in positions if p.is_open]
    by_portfolio = _group_by(open_positions, "portfolio")

    result: list[PortfolioAggregate] = []
    for portfolio in sorted(by_portfolio):
        by_code = _group_by(by_portfolio[portfolio], "code")
        instruments: list[InstrumentAggregate] = []
        for code in sorted(by_code):
            quote = quotes.get(code)
            if quote is None:
                log.debug(
                    "instrument_skipped_no_quote",
                    portfolio=portfolio,
                    code=code,
                    lots=len(by_code[code]),
                )
                continue
            instruments.append(aggregate_instrument(code, quote, by_code[code], full_position))
        result.append(aggregate_portfolio(portfolio, instruments, full_position))

    return result
