"""Position model: one buy lot, open or closed."""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

PositionStatus = Literal["OPEN", "CLOSED"]

# Older stores wrote POSITION / CLOSE.
_LEGACY_STATUS = {"POSITION": "OPEN", "CLOSE": "CLOSED"}


class Position(BaseModel):
    """An open or closed holding owned by the position store.

    A partial exit splits a lot: the original keeps the remaining quantity and
    a new CLOSED record points back at it through ``parent_id``.
    """

    id: str
    code: str
    name: str
    buy_price: float = Field(gt=0)
    buy_date: date
    quantity: int = Field(gt=0)
    status: PositionStatus = "OPEN"
    portfolio: str
    sell_price: float | None = None
    sell_date: date | None = None
    parent_id: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            upper = value.upper()
            return _LEGACY_STATUS.get(upper, upper)
        return value

    @model_validator(mode="after")
    def _check_sell_fields(self) -> Position:
        has_sell = self.sell_price is not None or self.sell_date is not None
        if self.status == "CLOSED":
            if self.sell_price is None or self.sell_date is None:
                raise ValueError("closed position requires sell_price and sell_date")
        elif has_sell:
            raise ValueError("open position must not carry sell_price or sell_date")
        return self

    @property
    def is_open(self) -> bool:
        return self.status == "OPEN"

    @property
    def is_closed(self) -> bool:
        return self.status == "CLOSED"

    @property
    def cost(self) -> float:
        return self.buy_price * self.quantity

    def realised_profit_loss(self) -> float | None:
        """Realised P/L for a closed lot, ``None`` while still open."""
        if not self.is_closed or self.sell_price is None:
            return None
        return (self.sell_price - self.buy_price) * self.quantity

    def realised_profit_loss_rate(self) -> float | None:
        pnl = self.realised_profit_loss()
        if pnl is None:
            return None
        cost = self.cost
        return pnl / cost if cost != 0 else 0.0
