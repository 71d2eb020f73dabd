"""Interfaces for the two quote sources the acquirer combines."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from portfolio_pnl.models.quote import Quote


class LiveQuoteSource(Protocol):
    async def fetch_quotes(self, codes: Iterable[str]) -> dict[str, Quote]:
        """Return quotes for the codes that resolved; omit the rest."""
        ...


class SyntheticQuoteSource(Protocol):
    def generate(self, codes: Iterable[str]) -> dict[str, Quote]:
        """Return a quote for every code."""
        ...
