"""Portfolio profit/loss engine: quote acquisition and position roll-ups."""

__version__ = "0.1.0"
