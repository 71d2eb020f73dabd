"""Quote model: a code's current name/price pair."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Quote(BaseModel):
    """Current price for one instrument, produced fresh per aggregation."""

    code: str
    name: str
    price: float = Field(ge=0)
    source: Literal["live", "synthetic"] = "live"
