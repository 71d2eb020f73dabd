"""Read-only position source backed by the positions table."""

from __future__ import annotations

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio_pnl.models.position import Position
from portfolio_pnl.store.tables import PositionRow

log = structlog.get_logger("position_store")

_OPEN_STATUSES = ("OPEN", "POSITION")
_CLOSED_STATUSES = ("CLOSED", "CLOSE")


def row_to_position(row: PositionRow) -> Position:
    return Position(
        id=row.id,
        code=row.code,
        name=row.name,
        buy_price=row.buy_price,
        buy_date=row.buy_date,
        quantity=row.quantity,
        status=row.status,
        portfolio=row.portfolio,
        sell_price=row.sell_price,
        sell_date=row.sell_date,
        parent_id=row.parent_id,
    )


class SqlPositionStore:
    """Reads positions; writes belong to whoever owns the table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _rows(self, statuses: tuple[str, ...], *order_by) -> list[PositionRow]:
        return list(
            self._session.execute(
                select(PositionRow)
                .where(PositionRow.status.in_(statuses))
                .order_by(*order_by)
            ).scalars()
        )

    def open_positions(self) -> list[Position]:
        rows = self._rows(
            _OPEN_STATUSES,
            PositionRow.portfolio,
            PositionRow.code,
            PositionRow.buy_date.desc(),
        )
        return [row_to_position(row) for row in rows]

    def closed_positions(self) -> list[Position]:
        """Closed lots, newest sale first.

        Older stores closed a lot by flipping its status only, leaving the
        sell columns NULL. Those rows carry no realised P/L and are skipped.
        """
        positions: list[Position] = []
        for row in self._rows(_CLOSED_STATUSES, PositionRow.sell_date.desc()):
            if row.sell_price is None or row.sell_date is None:
                log.warning("closed_position_missing_sale", id=row.id, code=row.code)
                continue
            positions.append(row_to_position(row))
        return positions
