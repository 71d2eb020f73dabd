"""Presentation sink: receives the engine's aggregate output."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from typing import Any, Protocol, TextIO

from portfolio_pnl.models.aggregate import ClosedTradesSummary, PortfolioAggregate


class AggregateSink(Protocol):
    def emit(self, aggregates: Sequence[PortfolioAggregate]) -> None:
        ...

    def emit_closed(self, summary: ClosedTradesSummary) -> None:
        ...


def serialize(aggregates: Sequence[PortfolioAggregate]) -> list[dict]:
    """JSON-ready dicts; dates become YYYY-MM-DD strings."""
    return [a.model_dump(mode="json") for a in aggregates]


class JsonSink:
    """Writes each report as one JSON document to a text stream."""

    def __init__(self, stream: TextIO | None = None, indent: int | None = 2) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._indent = indent

    def _write(self, payload: Any) -> None:
        json.dump(payload, self._stream, indent=self._indent, ensure_ascii=False)
        self._stream.write("\n")
        self._stream.flush()

    def emit(self, aggregates: Sequence[PortfolioAggregate]) -> None:
        self._write(serialize(aggregates))

    def emit_closed(self, summary: ClosedTradesSummary) -> None:
        self._write(summary.model_dump(mode="json"))
