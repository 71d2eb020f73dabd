"""Tests for the profit/loss view pipeline, the JSON sink and the report runner."""

from __future__ import annotations

import asyncio
import io
import json
import logging
from datetime import date

import pytest
import structlog
from sqlalchemy import create_engine

from factories import make_position, make_quote
from portfolio_pnl.aggregation import summarize_closed_trades
from portfolio_pnl.config import AppConfig
from portfolio_pnl.quotes import QuoteAcquirer
from portfolio_pnl.report.runner import main, run_report, write_closed_trades
from portfolio_pnl.service import build_profit_loss_view, distinct_codes
from portfolio_pnl.sink import JsonSink, serialize
from portfolio_pnl.store import Base, PositionRow


class StaticLiveSource:
    def __init__(self, quotes):
        self._quotes = quotes
        self.calls = 0

    async def fetch_quotes(self, codes):
        self.calls += 1
        return {c: self._quotes[c] for c in codes if c in self._quotes}


class ListSource:
    def __init__(self, positions):
        self._positions = positions

    def open_positions(self):
        return [p for p in self._positions if p.is_open]

    def closed_positions(self):
        return [p for p in self._positions if p.is_closed]


class CollectingSink:
    def __init__(self):
        self.emitted = []

    def emit(self, aggregates):
        self.emitted.append(list(aggregates))

    def emit_closed(self, summary):
        self.emitted.append(summary)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestBuildProfitLossView:
    def test_distinct_codes_sorted(self):
        positions = [make_position(code=c) for c in ("B", "A", "B")]
        assert distinct_codes(positions) == ["A", "B"]

    def test_empty_book_skips_quotes(self):
        live = StaticLiveSource({})
        result = asyncio.run(build_profit_loss_view([], QuoteAcquirer(live)))
        assert result == []
        assert live.calls == 0

    def test_only_closed_positions_is_empty(self):
        closed = make_position(status="CLOSED", sell_price=11.0, sell_date="2024-02-01")
        live = StaticLiveSource({})
        assert asyncio.run(build_profit_loss_view([closed], QuoteAcquirer(live))) == []
        assert live.calls == 0

    def test_live_and_backfilled_codes_all_priced(self):
        positions = [
            make_position(code="600519", buy_price=10.0, quantity=100),
            make_position(code="BB", buy_price=10.0, quantity=10),
        ]
        live = StaticLiveSource({"600519": make_quote("600519", 15.0)})
        result = asyncio.run(build_profit_loss_view(positions, QuoteAcquirer(live), 50000.0))

        instruments = {i.code: i for i in result[0].instruments}
        assert instruments["600519"].price == 15.0
        # Backfilled: 10.0 + 0.5 * len("BB")
        assert instruments["BB"].price == pytest.approx(11.0)

    def test_force_synthetic(self):
        positions = [make_position(code="AAA", buy_price=10.0, quantity=10)]
        live = StaticLiveSource({"AAA": make_quote("AAA", 99.0)})
        result = asyncio.run(
            build_profit_loss_view(positions, QuoteAcquirer(live), force_synthetic=True)
        )
        assert live.calls == 0
        assert result[0].instruments[0].price == pytest.approx(11.5)


class TestJsonSink:
    def test_serialises_nested_structure(self):
        positions = [make_position(code="A", buy_date="2024-06-01")]
        aggregates = asyncio.run(
            build_profit_loss_view(positions, QuoteAcquirer(StaticLiveSource({"A": make_quote("A", 12.0)})))
        )
        stream = io.StringIO()
        JsonSink(stream).emit(aggregates)

        payload = json.loads(stream.getvalue())
        assert payload == serialize(aggregates)
        trade = payload[0]["instruments"][0]["trades"][0]
        assert trade["buy_date"] == "2024-06-01"
        assert payload[0]["portfolio"] == "P1"
        assert payload[0]["full_position"] == 50000.0


    def test_closed_summary_uses_same_writer(self):
        summary = summarize_closed_trades([
            make_position(status="CLOSED", buy_price=10.0, quantity=10, buy_date="2024-01-01",
                          sell_price=11.0, sell_date="2024-01-11"),
        ])
        stream = io.StringIO()
        JsonSink(stream, indent=None).emit_closed(summary)

        text = stream.getvalue()
        assert text.endswith("\n") and text.count("\n") == 1
        payload = json.loads(text)
        assert payload == summary.model_dump(mode="json")
        assert payload["trades"][0]["sell_date"] == "2024-01-11"
        assert payload["statistics"]["average_holding_days"] == pytest.approx(10.0)


class TestRunReport:
    def test_emits_to_sink(self):
        source = ListSource([make_position(code="A", buy_price=10.0, quantity=10)])
        sink = CollectingSink()
        cfg = AppConfig(aggregation={"full_position": 1000.0})
        acquirer = QuoteAcquirer(StaticLiveSource({"A": make_quote("A", 12.0)}))

        asyncio.run(run_report(cfg, source, sink, acquirer=acquirer))

        (aggregates,) = sink.emitted
        assert aggregates[0].full_position == 1000.0
        assert aggregates[0].instruments[0].cost_exposure_ratio == pytest.approx(0.1)

    def test_write_closed_trades(self):
        source = ListSource([
            make_position(status="CLOSED", buy_price=10.0, quantity=10,
                          sell_price=12.0, sell_date="2024-02-01"),
        ])
        stream = io.StringIO()
        write_closed_trades(source, stream)
        payload = json.loads(stream.getvalue())
        assert payload["statistics"]["total_trades"] == 1
        assert payload["statistics"]["total_profit_loss"] == pytest.approx(20.0)


class TestMain:
    def test_end_to_end_synthetic(self, tmp_path, monkeypatch, capsys):
        url = f"sqlite:///{tmp_path / 'positions.db'}"
        engine = create_engine(url)
        Base.metadata.create_all(engine)
        with engine.begin() as conn:
            conn.execute(PositionRow.__table__.insert(), [
                {"id": "1", "code": "AAA", "name": "Triple A", "buy_price": 10.0,
                 "buy_date": date(2024, 1, 2), "quantity": 100, "status": "OPEN", "portfolio": "P1"},
                {"id": "2", "code": "BB", "name": "Double B", "buy_price": 10.0,
                 "buy_date": date(2024, 1, 3), "quantity": 100, "status": "OPEN", "portfolio": "P1"},
            ])
        engine.dispose()
        monkeypatch.setenv("PORTFOLIO_DATABASE_URL", url)

        main(force_synthetic=True)

        payload = json.loads(capsys.readouterr().out)
        prices = {i["code"]: i["price"] for i in payload[0]["instruments"]}
        assert prices == {"AAA": pytest.approx(11.5), "BB": pytest.approx(11.0)}
        # Equal cost, so the tie falls back to code order.
        assert [i["code"] for i in payload[0]["instruments"]] == ["AAA", "BB"]
