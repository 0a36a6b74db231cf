"""Player session, career and goal database schemas."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneygame_backend.database.base import MONEY, BaseSchema
from moneygame_backend.database.schemas.asset import PlayerAssetSchema


class CareerSchema(BaseSchema):
    """Career a player can be assigned at the start of a session."""

    __tablename__ = "careers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)

    expenses: Mapped[list["CareerExpenseSchema"]] = relationship(
        back_populates="career", cascade="all, delete-orphan"
    )


class CareerExpenseSchema(BaseSchema):
    """Recurring monthly expense attached to a career."""

    __tablename__ = "career_expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    career_id: Mapped[int] = mapped_column(
        ForeignKey("careers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    career: Mapped[CareerSchema] = relationship(back_populates="expenses")


class GoalSchema(BaseSchema):
    """Personal goal a player pursues besides financial freedom."""

    __tablename__ = "goals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class PlayerSessionSchema(BaseSchema):
    """Financial state of a player inside a single game session."""

    __tablename__ = "player_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(64), nullable=False)
    career_id: Mapped[int | None] = mapped_column(
        ForeignKey("careers.id"), nullable=True
    )
    goal_id: Mapped[int | None] = mapped_column(ForeignKey("goals.id"), nullable=True)
    cash: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)
    savings: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)
    salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)
    passive_income: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    career: Mapped[CareerSchema | None] = relationship()
    goal: Mapped[GoalSchema | None] = relationship()
    assets: Mapped[list[PlayerAssetSchema]] = relationship(
        cascade="all, delete-orphan"
    )
