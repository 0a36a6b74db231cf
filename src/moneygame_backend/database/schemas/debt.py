"""Player debt database schema."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from moneygame_backend.database.base import MONEY, RATE, BaseSchema, enum_values
from moneygame_backend.shared import LoanType


class PlayerDebtSchema(BaseSchema):
    """Loan held by a player; rows are kept after payoff as credit history."""

    __tablename__ = "player_debts"
    __table_args__ = (
        Index("ix_player_debts_player_due", "player_id", "due_date"),
        CheckConstraint(
            "current_balance >= 0 AND current_balance <= original_amount",
            name="ck_player_debts_balance_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_id: Mapped[int] = mapped_column(
        ForeignKey("player_sessions.id", ondelete="CASCADE"), nullable=False
    )
    loan_type: Mapped[LoanType] = mapped_column(
        Enum(LoanType, name="loan_type", values_callable=enum_values),
        nullable=False,
    )
    original_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    current_balance: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    interest_rate: Mapped[Decimal] = mapped_column(RATE, nullable=False)
    monthly_payment: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    term_months: Mapped[int] = mapped_column(Integer, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    last_payment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_paid_off: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    collateral_asset_id: Mapped[int | None] = mapped_column(
        ForeignKey("assets.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
