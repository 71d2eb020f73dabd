"""Engine and session helpers for the position store."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

from sqlalchemy import create_engine, Engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def _ensure_psycopg_driver(url: str) -> str:
    """Rewrite postgresql:// to postgresql+psycopg:// for psycopg v3."""
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


def _ensure_sqlite_dir(url: str) -> None:
    """SQLite will not create missing parent directories of its file."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or parsed.database in (None, "", ":memory:"):
        return
    Path(parsed.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def init_engine(url: str, **kwargs) -> Engine:
    """Create the process-wide engine and session factory for *url*."""
    global _engine, _SessionLocal
    url = _ensure_psycopg_driver(url)
    _ensure_sqlite_dir(url)
    _engine = create_engine(url, **kwargs)
    _SessionLocal = sessionmaker(bind=_engine)
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Position store not initialised; call init_engine() first")
    return _engine


def get_session() -> Generator[Session, None, None]:
    """Yield a read session on the position store, closing it afterwards."""
    if _SessionLocal is None:
        raise RuntimeError("Position store not initialised; call init_engine() first")
    session = _SessionLocal()
    try:
        yield session
    finally:
        session.close()
