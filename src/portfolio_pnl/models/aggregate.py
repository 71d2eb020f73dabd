"""Derived roll-ups: trade, instrument and portfolio P/L, closed-trade stats."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from portfolio_pnl.models.position import Position, PositionStatus


class TradeProfitLoss(BaseModel):
    """One open lot marked to a quote price."""

    id: str
    code: str
    name: str
    buy_date: date
    buy_price: float
    quantity: int
    price: float
    position_cost: float
    profit_loss: float
    profit_loss_rate: float
    status: PositionStatus
    portfolio: str

    @classmethod
    def from_position(cls, position: Position, price: float) -> TradeProfitLoss:
        cost = position.buy_price * position.quantity
        pnl = (price - position.buy_price) * position.quantity
        return cls(
            id=position.id,
            code=position.code,
            name=position.name,
            buy_date=position.buy_date,
            buy_price=position.buy_price,
            quantity=position.quantity,
            price=price,
            position_cost=cost,
            profit_loss=pnl,
            profit_loss_rate=pnl / cost if cost != 0 else 0.0,
            status=position.status,
            portfolio=position.portfolio,
        )


class InstrumentAggregate(BaseModel):
    """All open lots of one code inside one portfolio."""

    code: str
    name: str
    price: float
    trades: list[TradeProfitLoss] = Field(default_factory=list)
    total_quantity: int = 0
    total_cost: float = 0.0
    profit_loss: float = 0.0
    profit_loss_rate: float = 0.0
    cost_exposure_ratio: float = 0.0
    current_exposure_ratio: float = 0.0
    recommended_buy_point: float = 0.0
    recommended_sell_point: float = 0.0


class PortfolioAggregate(BaseModel):
    """One portfolio's instruments plus portfolio-level totals."""

    portfolio: str
    full_position: float
    instruments: list[InstrumentAggregate] = Field(default_factory=list)
    total_cost: float = 0.0
    total_profit_loss: float = 0.0
    profit_loss_rate: float = 0.0


class ClosedTrade(BaseModel):
    """A realised lot: bought, then fully or partially sold."""

    id: str
    code: str
    name: str
    portfolio: str
    buy_date: date
    buy_price: float
    sell_date: date
    sell_price: float
    quantity: int
    profit_loss: float
    profit_loss_rate: float
    holding_days: int
    parent_id: str | None = None


class ClosedTradesStatistics(BaseModel):
    total_trades: int = 0
    profitable_trades: int = 0
    loss_trades: int = 0
    win_rate: float = 0.0
    total_profit_loss: float = 0.0
    average_profit_loss_rate: float = 0.0
    max_profit: float = 0.0
    max_loss: float = 0.0
    average_holding_days: float = 0.0


class ClosedTradesSummary(BaseModel):
    trades: list[ClosedTrade] = Field(default_factory=list)
    statistics: ClosedTradesStatistics = Field(default_factory=ClosedTradesStatistics)
