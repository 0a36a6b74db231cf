"""SQL adapter for debt records."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from moneygame_backend.database.repositories._time import as_utc
from moneygame_backend.database.schemas import PlayerDebtSchema
from moneygame_backend.finance import DebtNotFoundError, DebtRecord, NewDebt


def _to_record(debt: PlayerDebtSchema) -> DebtRecord:
    return DebtRecord(
        debt_id=debt.id,
        player_id=debt.player_id,
        loan_type=debt.loan_type,
        original_amount=debt.original_amount,
        current_balance=debt.current_balance,
        interest_rate=debt.interest_rate,
        monthly_payment=debt.monthly_payment,
        term_months=debt.term_months,
        due_date=debt.due_date,
        created_at=as_utc(debt.created_at),
        last_payment_date=(
            as_utc(debt.last_payment_date)
            if debt.last_payment_date is not None
            else None
        ),
        is_paid_off=debt.is_paid_off,
        description=debt.description,
        collateral_asset_id=debt.collateral_asset_id,
    )


class SqlDebtRepository:
    """Encapsulates persistence operations for :class:`PlayerDebtSchema`."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_debts(
        self, player_id: int, *, active_only: bool = False
    ) -> list[DebtRecord]:
        """Return debts of *player_id* ordered by due date."""
        stmt = (
            select(PlayerDebtSchema)
            .where(PlayerDebtSchema.player_id == player_id)
            .order_by(PlayerDebtSchema.due_date, PlayerDebtSchema.id)
        )
        if active_only:
            stmt = stmt.where(PlayerDebtSchema.is_paid_off.is_(False))
        return [_to_record(debt) for debt in self._session.scalars(stmt)]

    def get_debt(self, debt_id: int, *, for_update: bool = False) -> DebtRecord | None:
        """Return debt by ID, locking the row when *for_update* is set."""
        stmt = select(PlayerDebtSchema).where(PlayerDebtSchema.id == debt_id)
        if for_update:
            stmt = stmt.with_for_update()
        debt = self._session.scalar(stmt)
        return _to_record(debt) if debt is not None else None

    def create_debt(self, debt: NewDebt) -> DebtRecord:
        """Insert a newly originated debt."""
        schema = PlayerDebtSchema(
            player_id=debt.player_id,
            loan_type=debt.loan_type,
            original_amount=debt.original_amount,
            current_balance=debt.original_amount,
            interest_rate=debt.interest_rate,
            monthly_payment=debt.monthly_payment,
            term_months=debt.term_months,
            due_date=debt.due_date,
            created_at=debt.created_at,
            is_paid_off=False,
            description=debt.description,
            collateral_asset_id=debt.collateral_asset_id,
        )
        self._session.add(schema)
        self._session.flush()
        return _to_record(schema)

    def save_debt(self, debt: DebtRecord) -> DebtRecord:
        """Write back the fields a payment may change."""
        schema = self._session.get(PlayerDebtSchema, debt.debt_id)
        if schema is None:
            raise DebtNotFoundError(debt.debt_id)
        schema.current_balance = debt.current_balance
        schema.is_paid_off = debt.is_paid_off
        schema.last_payment_date = debt.last_payment_date
        schema.due_date = debt.due_date
        schema.monthly_payment = debt.monthly_payment
        self._session.flush()
        return _to_record(schema)


__all__ = ["SqlDebtRepository"]
