"""Quote acquisition: live provider with synthetic backfill."""

from portfolio_pnl.quotes.acquirer import QuoteAcquirer
from portfolio_pnl.quotes.base import LiveQuoteSource, SyntheticQuoteSource
from portfolio_pnl.quotes.synthetic import SyntheticQuoteGenerator
from portfolio_pnl.quotes.tencent import (
    TencentQuoteClient,
    normalize_code,
    parse_quote_response,
)

__all__ = [
    "LiveQuoteSource",
    "QuoteAcquirer",
    "SyntheticQuoteGenerator",
    "SyntheticQuoteSource",
    "TencentQuoteClient",
    "normalize_code",
    "parse_quote_response",
]
