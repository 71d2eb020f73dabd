"""Exception types raised inside the quote path."""


class PortfolioPnlError(Exception):
    """Base class for errors raised by portfolio_pnl."""


class QuoteError(PortfolioPnlError):
    """A single instrument's quote could not be produced."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code


class QuoteFetchError(QuoteError):
    """Transport-level failure talking to the quote provider."""


class QuoteParseError(QuoteError):
    """The provider answered, but the body did not contain a usable quote."""
