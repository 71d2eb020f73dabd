"""Pure P/L helpers: no I/O, no models."""

from __future__ import annotations

from datetime import date

# Recommendation bands around the most recent buy price.
BUY_BAND = 0.9
SELL_BAND = 1.1


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def exposure_ratio(amount: float, full_position: float) -> float:
    """Share of the full-position capital that *amount* represents."""
    return safe_ratio(amount, full_position)


def recommended_bands(last_buy_price: float) -> tuple[float, float]:
    """(buy point, sell point) derived from the latest buy price."""
    return last_buy_price * BUY_BAND, last_buy_price * SELL_BAND


def holding_days(buy_date: date, sell_date: date) -> int:
    return (sell_date - buy_date).days
