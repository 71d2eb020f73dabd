"""Placeholder prices for when the live provider is unavailable.

Not a pricing model. It only keeps the rest of the pipeline exercisable
offline, so the output is deterministic and deliberately naive.
"""

from __future__ import annotations

from collections.abc import Iterable

from portfolio_pnl.models.quote import Quote

SYNTHETIC_NAME_PREFIX = "Synthetic "
SYNTHETIC_BASE_PRICE = 10.0
SYNTHETIC_PRICE_PER_CHAR = 0.5


class SyntheticQuoteGenerator:
    """name = prefix + code, price = base + per_char * len(code)."""

    def __init__(
        self,
        name_prefix: str = SYNTHETIC_NAME_PREFIX,
        base_price: float = SYNTHETIC_BASE_PRICE,
        price_per_char: float = SYNTHETIC_PRICE_PER_CHAR,
    ) -> None:
        self.name_prefix = name_prefix
        self.base_price = base_price
        self.price_per_char = price_per_char

    def price_for(self, code: str) -> float:
        return self.base_price + len(code) * self.price_per_char

    def generate(self, codes: Iterable[str]) -> dict[str, Quote]:
        return {
            code: Quote(
                code=code,
                name=f"{self.name_prefix}{code}",
                price=self.price_for(code),
                source="synthetic",
            )
            for code in codes
        }
