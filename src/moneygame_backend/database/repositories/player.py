"""SQL adapter for player session data used by the finance engine."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from moneygame_backend.database.schemas import (
    PlayerSessionSchema,
    SessionAssetStateSchema,
)
from moneygame_backend.finance import (
    AssetHolding,
    CareerProfile,
    InsufficientFundsError,
    PlayerAccount,
    PlayerNotFoundError,
    PlayerProfile,
)
from moneygame_backend.shared import ZERO, AccountKind, quantize_money

_BALANCE_COLUMNS = {
    AccountKind.CASH: PlayerSessionSchema.cash,
    AccountKind.SAVINGS: PlayerSessionSchema.savings,
}


def _to_account(player: PlayerSessionSchema) -> PlayerAccount:
    return PlayerAccount(
        cash=player.cash,
        savings=player.savings,
        salary=player.salary,
        passive_income=player.passive_income,
    )


class SqlPlayerRepository:
    """Read and mutate player balances inside an open session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_profile(self, player_id: int) -> PlayerProfile | None:
        """Return the player with career, goal and priced asset holdings."""
        player = self._session.get(PlayerSessionSchema, player_id)
        if player is None:
            return None

        career = None
        if player.career is not None:
            career = CareerProfile(
                career_id=player.career.id,
                name=player.career.name,
                base_salary=player.career.base_salary,
                monthly_expenses=sum(
                    (expense.amount for expense in player.career.expenses),
                    start=ZERO,
                ),
            )

        prices = self._session_prices(player.session_id)
        assets = tuple(
            AssetHolding(
                asset_id=holding.asset_id,
                name=holding.asset.name,
                quantity=holding.quantity,
                catalog_cost=holding.asset.cost,
                cash_flow=holding.asset.cash_flow,
                session_price=prices.get(holding.asset_id),
            )
            for holding in player.assets
        )

        return PlayerProfile(
            player_id=player.id,
            session_id=player.session_id,
            display_name=player.display_name,
            account=_to_account(player),
            career=career,
            goal_id=player.goal_id,
            goal_name=player.goal.name if player.goal is not None else None,
            assets=assets,
        )

    def get_account(
        self, player_id: int, *, for_update: bool = False
    ) -> PlayerAccount | None:
        """Return balances, locking the player row when *for_update* is set."""
        stmt = select(PlayerSessionSchema).where(PlayerSessionSchema.id == player_id)
        if for_update:
            stmt = stmt.with_for_update()
        player = self._session.scalar(stmt)
        return _to_account(player) if player is not None else None

    def adjust_balance(
        self, player_id: int, account: AccountKind, delta: Decimal
    ) -> Decimal:
        """Apply *delta* server-side so concurrent increments are never lost."""
        column = _BALANCE_COLUMNS[account]
        result = self._session.execute(
            update(PlayerSessionSchema)
            .where(PlayerSessionSchema.id == player_id)
            .values({column: column + delta})
        )
        if result.rowcount == 0:
            raise PlayerNotFoundError(player_id)

        new_balance = self._session.scalar(
            select(column).where(PlayerSessionSchema.id == player_id)
        )
        if new_balance < 0:
            msg = f"Account {account} of player {player_id} would become negative."
            raise InsufficientFundsError(msg)
        return quantize_money(new_balance)

    def _session_prices(self, session_id: int) -> dict[int, Decimal]:
        rows = self._session.execute(
            select(
                SessionAssetStateSchema.asset_id,
                SessionAssetStateSchema.current_price,
            ).where(SessionAssetStateSchema.session_id == session_id)
        )
        return {asset_id: price for asset_id, price in rows}


__all__ = ["SqlPlayerRepository"]
