"""Financial event primitives shared across the backend."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from moneygame_backend.shared.enums import FinancialEventType  # noqa: TC001


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FinancialEvent(BaseModel):
    """Represents a single immutable credit-history entry for a player."""

    model_config = ConfigDict(frozen=True)

    player_id: int = Field(..., ge=1)
    event_type: FinancialEventType
    amount: Decimal
    debt_id: int | None = Field(default=None, ge=1)
    message: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime = Field(default_factory=_utcnow)


__all__ = ["FinancialEvent"]
