"""Report runner: wires config, logging, the position store and the sink."""

from __future__ import annotations

import asyncio
import sys
from typing import TextIO

import structlog

from portfolio_pnl.aggregation.closed_trades import summarize_closed_trades
from portfolio_pnl.config.loader import load_config
from portfolio_pnl.config.schema import AppConfig
from portfolio_pnl.logging.setup import setup_logging
from portfolio_pnl.quotes.acquirer import QuoteAcquirer
from portfolio_pnl.service import build_profit_loss_view
from portfolio_pnl.sink import AggregateSink, JsonSink
from portfolio_pnl.store.base import PositionSource
from portfolio_pnl.store.engine import get_session, init_engine
from portfolio_pnl.store.sql import SqlPositionStore

log = structlog.get_logger("report")


async def run_report(
    config: AppConfig,
    source: PositionSource,
    sink: AggregateSink,
    acquirer: QuoteAcquirer | None = None,
) -> None:
    """Build the profit/loss view once and hand it to *sink*."""
    owns_acquirer = acquirer is None
    if acquirer is None:
        acquirer = QuoteAcquirer.from_config(config.quotes)
    try:
        aggregates = await build_profit_loss_view(
            source.open_positions(),
            acquirer,
            full_position=config.aggregation.full_position,
            force_synthetic=config.aggregation.force_synthetic,
        )
    finally:
        if owns_acquirer:
            await acquirer.close()
    sink.emit(aggregates)


def write_closed_trades(source: PositionSource, stream: TextIO) -> None:
    JsonSink(stream).emit_closed(summarize_closed_trades(source.closed_positions()))


def main(
    config_path: str | None = None,
    force_synthetic: bool = False,
    full_position: float | None = None,
    closed: bool = False,
) -> None:
    """Entry point for ``python -m portfolio_pnl.report``."""
    config = load_config(config_path)
    if force_synthetic:
        config.aggregation.force_synthetic = True
    if full_position is not None:
        config.aggregation.full_position = full_position
    setup_logging(level=config.logging.level, log_format=config.logging.format)

    init_engine(config.database.url)
    session_gen = get_session()
    session = next(session_gen)
    try:
        source = SqlPositionStore(session)
        if closed:
            write_closed_trades(source, sys.stdout)
        else:
            log.info(
                "report_started",
                force_synthetic=config.aggregation.force_synthetic,
                full_position=config.aggregation.full_position,
            )
            asyncio.run(run_report(config, source, JsonSink(sys.stdout)))
    finally:
        session_gen.close()
