"""Command-line report of the portfolio profit/loss view."""
