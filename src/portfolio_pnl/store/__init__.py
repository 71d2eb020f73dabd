"""Position-store collaborator: read-only access to position records."""

from portfolio_pnl.store.base import PositionSource
from portfolio_pnl.store.engine import get_engine, get_session, init_engine
from portfolio_pnl.store.sql import SqlPositionStore
from portfolio_pnl.store.tables import Base, PositionRow

__all__ = [
    "Base",
    "PositionRow",
    "PositionSource",
    "SqlPositionStore",
    "get_engine",
    "get_session",
    "init_engine",
]
