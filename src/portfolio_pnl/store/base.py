"""What the engine needs from whoever owns the position records."""

from __future__ import annotations

from typing import Protocol

from portfolio_pnl.models.position import Position


class PositionSource(Protocol):
    def open_positions(self) -> list[Position]:
        ...

    def closed_positions(self) -> list[Position]:
        ...
