"""SQLAlchemy ORM mapping of the positions table."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class PositionRow(Base):
    __tablename__ = "positions"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    code: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    buy_price: Mapped[float] = mapped_column(Float, nullable=False)
    buy_date: Mapped[date] = mapped_column(Date, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # OPEN / CLOSED; legacy rows may still hold POSITION / CLOSE.
    status: Mapped[str] = mapped_column(Text, nullable=False, default="OPEN", index=True)
    portfolio: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    sell_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    sell_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    parent_id: Mapped[str | None] = mapped_column(Text, nullable=True)
