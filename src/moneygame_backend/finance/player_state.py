"""Derived player metrics: net worth, cash flow and win evaluation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from decimal import Decimal

from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    get_default_finance_configuration,
)
from moneygame_backend.finance.errors import PlayerNotFoundError
from moneygame_backend.finance.models import (
    DebtRecord,
    PlayerProfile,
    PlayerState,
    PlayerWinCondition,
    WinDetails,
)
from moneygame_backend.finance.ports import FinanceUnitOfWork  # noqa: TC001
from moneygame_backend.shared.enums import WinType
from moneygame_backend.shared.value_objects import ZERO

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def total_asset_value(profile: PlayerProfile) -> Decimal:
    """Market value of all holdings, using catalog cost when unpriced."""
    return sum((holding.market_value for holding in profile.assets), start=ZERO)


def total_active_balance(active_debts: Sequence[DebtRecord]) -> Decimal:
    return sum(
        (debt.current_balance for debt in active_debts if not debt.is_paid_off),
        start=ZERO,
    )


def net_worth(profile: PlayerProfile, active_debts: Sequence[DebtRecord]) -> Decimal:
    """Cash plus savings plus assets, minus outstanding debt."""
    account = profile.account
    return (
        account.cash
        + account.savings
        + total_asset_value(profile)
        - total_active_balance(active_debts)
    )


def monthly_cash_flow(
    profile: PlayerProfile, active_debts: Sequence[DebtRecord]
) -> Decimal:
    """Career salary plus passive and asset income, minus debt service and expenses."""
    career = profile.career
    base_salary = career.base_salary if career is not None else ZERO
    expenses = career.monthly_expenses if career is not None else ZERO
    asset_income = sum(
        (holding.monthly_cash_flow for holding in profile.assets), start=ZERO
    )
    debt_service = sum(
        (debt.monthly_payment for debt in active_debts if not debt.is_paid_off),
        start=ZERO,
    )
    return (
        base_salary
        + profile.account.passive_income
        + asset_income
        - debt_service
        - expenses
    )


class PlayerFinancialStateCalculator:
    """Produce the authoritative financial snapshot of a player."""

    def __init__(
        self,
        unit_of_work: FinanceUnitOfWork,
        *,
        configuration: FinanceConfiguration | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._unit_of_work = unit_of_work
        self._config = configuration or get_default_finance_configuration()
        self._clock = clock

    def get_player_state(self, player_id: int) -> PlayerState:
        """Return the snapshot of *player_id*; raise if the player is unknown."""
        with self._unit_of_work.transaction() as repos:
            profile = repos.players.get_profile(player_id)
            if profile is None:
                raise PlayerNotFoundError(player_id)
            debts = repos.debts.list_debts(player_id, active_only=True)
        return self.build_state(profile, debts)

    @staticmethod
    def build_state(
        profile: PlayerProfile, active_debts: Sequence[DebtRecord]
    ) -> PlayerState:
        account = profile.account
        career = profile.career
        return PlayerState(
            player_id=profile.player_id,
            session_id=profile.session_id,
            display_name=profile.display_name,
            career_id=career.career_id if career is not None else None,
            career_name=career.name if career is not None else None,
            goal_id=profile.goal_id,
            goal_name=profile.goal_name,
            cash=account.cash,
            savings=account.savings,
            salary=account.salary,
            passive_income=account.passive_income,
            net_worth=net_worth(profile, active_debts),
            monthly_cash_flow=monthly_cash_flow(profile, active_debts),
            total_asset_value=total_asset_value(profile),
            total_debt_balance=total_active_balance(active_debts),
        )

    def check_win_condition(self, player_id: int) -> PlayerWinCondition:
        """Evaluate whether *player_id* has won; unknown players have not."""
        try:
            state = self.get_player_state(player_id)
        except PlayerNotFoundError:
            return PlayerWinCondition(has_won=False)
        except Exception:
            logger.exception(
                "Win condition check failed", extra={"player_id": player_id}
            )
            return PlayerWinCondition(has_won=False)
        return self.evaluate_win(state)

    def evaluate_win(self, state: PlayerState) -> PlayerWinCondition:
        config = self._config
        details = WinDetails(
            net_worth_target=config.net_worth_target,
            cash_flow_target=config.cash_flow_target,
            current_net_worth=state.net_worth,
            current_cash_flow=state.monthly_cash_flow,
            goal_name=state.goal_name,
        )
        if (
            state.net_worth >= config.net_worth_target
            and state.monthly_cash_flow >= config.cash_flow_target
        ):
            logger.info(
                "Financial freedom reached", extra={"player_id": state.player_id}
            )
            return PlayerWinCondition(
                has_won=True,
                win_type=WinType.FINANCIAL_FREEDOM,
                win_timestamp=self._clock(),
                details=details,
            )
        if self._goal_achieved(state):
            return PlayerWinCondition(
                has_won=True,
                win_type=WinType.GOAL_ACHIEVEMENT,
                win_timestamp=self._clock(),
                details=details,
            )
        return PlayerWinCondition(has_won=False, details=details)

    @staticmethod
    def _goal_achieved(state: PlayerState) -> bool:
        # Goal-specific win rules are not modelled yet.
        return False


__all__ = [
    "PlayerFinancialStateCalculator",
    "monthly_cash_flow",
    "net_worth",
    "total_active_balance",
    "total_asset_value",
]
