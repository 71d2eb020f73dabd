"""QuoteAcquirer — live quotes first, synthetic backfill for whatever is missing."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from portfolio_pnl.config.schema import QuoteProviderConfig
from portfolio_pnl.models.quote import Quote
from portfolio_pnl.quotes.base import LiveQuoteSource, SyntheticQuoteSource
from portfolio_pnl.quotes.synthetic import SyntheticQuoteGenerator
from portfolio_pnl.quotes.tencent import TencentQuoteClient

log = structlog.get_logger("quote_acquirer")


class QuoteAcquirer:
    """Builds a code -> Quote map for a set of instrument codes.

    The pipeline is: attempt every code live, keep the successes, compute the
    missing set, backfill it synthetically. A live quote is never replaced.
    """

    def __init__(
        self,
        live: LiveQuoteSource,
        synthetic: SyntheticQuoteSource | None = None,
    ) -> None:
        self._live = live
        self._synthetic = synthetic if synthetic is not None else SyntheticQuoteGenerator()

    @classmethod
    def from_config(cls, config: QuoteProviderConfig) -> QuoteAcquirer:
        return cls(
            live=TencentQuoteClient(
                base_url=config.base_url,
                timeout_s=config.timeout_s,
                max_concurrency=config.max_concurrency,
                encoding=config.encoding,
            ),
        )

    async def close(self) -> None:
        close = getattr(self._live, "close", None)
        if close is not None:
            await close()

    async def acquire(
        self,
        codes: Iterable[str],
        force_synthetic: bool = False,
    ) -> dict[str, Quote]:
        requested = sorted(set(codes))
        if not requested:
            return {}

        if force_synthetic:
            log.info("quotes_synthetic_forced", count=len(requested))
            return self._synthetic.generate(requested)

        try:
            live_quotes = await self._live.fetch_quotes(requested)
        except Exception:
            # A source that fails as a whole is treated as every code failing.
            log.exception("live_quotes_unavailable", count=len(requested))
            live_quotes = {}

        wanted = set(requested)
        quotes = {code: q for code, q in live_quotes.items() if code in wanted}
        missing = [code for code in requested if code not in quotes]

        if missing:
            log.warning(
                "quotes_backfilled",
                live=len(quotes),
                missing=missing,
            )
            for code, quote in self._synthetic.generate(missing).items():
                quotes.setdefault(code, quote)
        else:
            log.info("quotes_live_complete", count=len(quotes))

        return quotes
