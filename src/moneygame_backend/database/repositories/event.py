"""SQL-backed financial event log."""

from __future__ import annotations

from sqlalchemy import select

from moneygame_backend.database.repositories._time import as_utc
from moneygame_backend.database.schemas import FinancialEventSchema
from moneygame_backend.database.service import DatabaseService  # noqa: TC001
from moneygame_backend.shared import FinancialEvent


class SqlFinancialEventLog:
    """Persist credit-history events in their own short transactions."""

    def __init__(self, database: DatabaseService) -> None:
        self._database = database

    def append(self, event: FinancialEvent) -> None:
        """Insert *event* into the ``financial_events`` table."""
        with self._database.session() as session:
            session.add(
                FinancialEventSchema(
                    player_id=event.player_id,
                    event_type=event.event_type,
                    amount=event.amount,
                    debt_id=event.debt_id,
                    message=event.message,
                    payload=dict(event.payload),
                    occurred_at=event.occurred_at,
                )
            )

    def fetch(self, player_id: int) -> tuple[FinancialEvent, ...]:
        """Return the events of *player_id* in insertion order."""
        with self._database.session() as session:
            rows = session.scalars(
                select(FinancialEventSchema)
                .where(FinancialEventSchema.player_id == player_id)
                .order_by(FinancialEventSchema.id)
            )
            return tuple(
                FinancialEvent(
                    player_id=row.player_id,
                    event_type=row.event_type,
                    amount=row.amount,
                    debt_id=row.debt_id,
                    message=row.message,
                    payload=row.payload,
                    occurred_at=as_utc(row.occurred_at),
                )
                for row in rows
            )


__all__ = ["SqlFinancialEventLog"]
