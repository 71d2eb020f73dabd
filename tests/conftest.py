"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from portfolio_pnl.store.tables import Base


@pytest.fixture
def db_session():
    """In-memory SQLite session with the positions table created."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    session = Session(engine)
    yield session
    session.close()
    engine.dispose()
