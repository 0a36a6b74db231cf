"""Financial event log database schema."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from moneygame_backend.database.base import MONEY, BaseSchema, enum_values
from moneygame_backend.shared import FinancialEventType


class FinancialEventSchema(BaseSchema):
    """Append-only credit history entry."""

    __tablename__ = "financial_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_id: Mapped[int] = mapped_column(
        ForeignKey("player_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_type: Mapped[FinancialEventType] = mapped_column(
        Enum(
            FinancialEventType,
            name="financial_event_type",
            values_callable=enum_values,
        ),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    debt_id: Mapped[int | None] = mapped_column(
        ForeignKey("player_debts.id"), nullable=True
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
