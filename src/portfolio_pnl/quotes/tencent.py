"""Tencent quote client — one HTTP GET per instrument code.

The provider answers with a JS assignment holding a tilde-separated record:

    v_sh600519="1~Kweichow Moutai~600519~1850.00~1838.50~...";

Only field 1 (display name) and field 3 (last price) are used.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Iterable

import httpx
import structlog

from portfolio_pnl.errors import QuoteError, QuoteFetchError, QuoteParseError
from portfolio_pnl.models.quote import Quote

log = structlog.get_logger("tencent_quotes")

NAME_FIELD = 1
PRICE_FIELD = 3

# Suspended or unknown instruments report these instead of a price.
_PRICE_SENTINELS = frozenset({"", "-", "--", "N/A"})


def normalize_code(code: str) -> str:
    """Prefix a bare 6-digit A-share code with its exchange.

    ``6xxxxx`` trades in Shanghai (``sh``), ``0xxxxx``/``3xxxxx`` in Shenzhen
    (``sz``). Anything else, including already-prefixed codes, is returned
    unchanged.
    """
    if len(code) == 6 and code.isascii() and code.isdigit():
        if code[0] == "6":
            return f"sh{code}"
        if code[0] in ("0", "3"):
            return f"sz{code}"
    return code


def parse_quote_response(text: str, code: str) -> Quote:
    """Extract a live quote for *code* from a raw provider body."""
    start = text.find('"')
    if start < 0:
        raise QuoteParseError(code, "no quoted payload in response")
    end = text.find('"', start + 1)
    if end < 0:
        raise QuoteParseError(code, "unterminated quoted payload")

    fields = text[start + 1:end].split("~")
    if len(fields) <= PRICE_FIELD:
        raise QuoteParseError(code, f"expected at least {PRICE_FIELD + 1} fields, got {len(fields)}")

    raw_price = fields[PRICE_FIELD].strip()
    if raw_price in _PRICE_SENTINELS:
        raise QuoteParseError(code, f"no price ({raw_price!r})")
    try:
        price = float(raw_price)
    except ValueError as exc:
        raise QuoteParseError(code, f"unparseable price {raw_price!r}") from exc
    if not math.isfinite(price) or price < 0:
        raise QuoteParseError(code, f"invalid price {raw_price!r}")

    return Quote(code=code, name=fields[NAME_FIELD].strip(), price=price, source="live")


class TencentQuoteClient:
    """Async client for the qt.gtimg.cn quote endpoint."""

    def __init__(
        self,
        base_url: str = "http://qt.gtimg.cn",
        timeout_s: float = 10.0,
        max_concurrency: int = 8,
        encoding: str = "gbk",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.max_concurrency = max(1, max_concurrency)
        self.encoding = encoding
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    async def __aenter__(self) -> TencentQuoteClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def url_for(self, code: str) -> str:
        return f"{self.base_url}/q={normalize_code(code)}"

    async def fetch_quote(self, code: str) -> Quote:
        """Fetch one quote. Raises QuoteFetchError / QuoteParseError."""
        http = await self._get_http()
        try:
            resp = await http.get(self.url_for(code))
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise QuoteFetchError(code, str(exc) or type(exc).__name__) from exc
        text = resp.content.decode(self.encoding, errors="replace")
        return parse_quote_response(text, code)

    async def fetch_quotes(self, codes: Iterable[str]) -> dict[str, Quote]:
        """Fetch every code independently; failures are logged and omitted."""
        unique = sorted(set(codes))
        if not unique:
            return {}

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _fetch(code: str) -> Quote | None:
            async with semaphore:
                try:
                    return await self.fetch_quote(code)
                except QuoteError as exc:
                    log.warning("quote_fetch_failed", code=code, error=str(exc))
                except Exception:
                    log.exception("quote_fetch_failed", code=code)
                return None

        results = await asyncio.gather(*(_fetch(code) for code in unique))
        quotes = {code: quote for code, quote in zip(unique, results) if quote is not None}
        log.debug("live_quotes_fetched", requested=len(unique), resolved=len(quotes))
        return quotes
