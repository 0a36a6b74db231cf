"""Snowball versus avalanche payoff comparison."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from math import ceil
from typing import Protocol

from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    get_default_finance_configuration,
)
from moneygame_backend.finance.models import (
    DebtRecord,
    PayoffOrderEntry,
    PayoffStrategyComparison,
    StrategyEstimate,
)
from moneygame_backend.finance.ports import FinanceUnitOfWork  # noqa: TC001
from moneygame_backend.shared.enums import PayoffStrategyName
from moneygame_backend.shared.value_objects import ZERO, monthly_rate, quantize_money

logger = logging.getLogger(__name__)

_QUICK_INTEREST_SHARE = Decimal("0.10")


def _order_entries(debts: Sequence[DebtRecord]) -> tuple[PayoffOrderEntry, ...]:
    return tuple(
        PayoffOrderEntry(
            debt_id=debt.debt_id,
            loan_type=debt.loan_type,
            balance=debt.current_balance,
            monthly_payment=debt.monthly_payment,
            interest_rate=debt.interest_rate,
        )
        for debt in debts
    )


class PayoffEstimator(Protocol):
    """Estimate the time and interest needed to clear debts in a given order."""

    def estimate(self, ordered_debts: Sequence[DebtRecord]) -> StrategyEstimate:
        """Return the estimate for paying *ordered_debts* front to back."""


class QuickPayoffEstimator:
    """Coarse estimate: total balance over total payment, 10% of balance as interest.

    The ordering does not influence the numbers; it is only echoed back.
    """

    def estimate(self, ordered_debts: Sequence[DebtRecord]) -> StrategyEstimate:
        total_balance = sum(
            (debt.current_balance for debt in ordered_debts), start=ZERO
        )
        total_payment = sum(
            (debt.monthly_payment for debt in ordered_debts), start=ZERO
        )
        months = ceil(total_balance / total_payment) if total_payment > 0 else 0
        return StrategyEstimate(
            order=_order_entries(ordered_debts),
            total_months=months,
            total_interest=total_balance * _QUICK_INTEREST_SHARE,
        )


class AmortizedPayoffEstimator:
    """Month-by-month simulation that rolls freed payments into the next debt."""

    def __init__(self, *, max_months: int = 360) -> None:
        self._max_months = max_months

    def estimate(self, ordered_debts: Sequence[DebtRecord]) -> StrategyEstimate:
        balances = [debt.current_balance for debt in ordered_debts]
        rates = [monthly_rate(debt.interest_rate) for debt in ordered_debts]
        budget = sum((debt.monthly_payment for debt in ordered_debts), start=ZERO)

        months = 0
        total_interest = ZERO
        while budget > 0 and months < self._max_months and any(
            balance > 0 for balance in balances
        ):
            months += 1
            for index, balance in enumerate(balances):
                if balance > 0:
                    interest = quantize_money(balance * rates[index])
                    balances[index] = balance + interest
                    total_interest += interest

            available = budget
            for index, debt in enumerate(ordered_debts):
                if balances[index] > 0:
                    paid = min(debt.monthly_payment, balances[index], available)
                    balances[index] -= paid
                    available -= paid
            for index in range(len(balances)):
                if available <= 0:
                    break
                if balances[index] > 0:
                    paid = min(balances[index], available)
                    balances[index] -= paid
                    available -= paid

        if any(balance > 0 for balance in balances):
            months = self._max_months

        return StrategyEstimate(
            order=_order_entries(ordered_debts),
            total_months=months,
            total_interest=total_interest,
        )


def empty_payoff_comparison(explanation: str) -> PayoffStrategyComparison:
    """Comparison returned when there is nothing to simulate."""
    return PayoffStrategyComparison(
        recommended=PayoffStrategyName.SNOWBALL,
        explanation=explanation,
    )


class PayoffStrategySimulator:
    """Compare snowball and avalanche orderings through a payoff estimator."""

    def __init__(
        self,
        unit_of_work: FinanceUnitOfWork,
        *,
        estimator: PayoffEstimator | None = None,
        configuration: FinanceConfiguration | None = None,
    ) -> None:
        self._unit_of_work = unit_of_work
        self._estimator = estimator or QuickPayoffEstimator()
        self._config = configuration or get_default_finance_configuration()

    def calculate_payoff_strategy(self, player_id: int) -> PayoffStrategyComparison:
        """Compare strategies for *player_id*, never raising."""
        try:
            with self._unit_of_work.transaction() as repos:
                debts = repos.debts.list_debts(player_id, active_only=True)
            return self.compare(debts)
        except Exception:
            logger.exception(
                "Payoff strategy calculation failed", extra={"player_id": player_id}
            )
            return empty_payoff_comparison(
                "An error occurred while calculating the payoff strategy."
            )

    def compare(self, active_debts: Sequence[DebtRecord]) -> PayoffStrategyComparison:
        """Estimate both orderings of *active_debts* and pick one."""
        if not active_debts:
            return empty_payoff_comparison("There is no debt to pay off.")

        snowball = self._estimator.estimate(
            sorted(active_debts, key=lambda debt: debt.current_balance)
        )
        avalanche = self._estimator.estimate(
            sorted(active_debts, key=lambda debt: debt.interest_rate, reverse=True)
        )

        interest_savings = snowball.total_interest - avalanche.total_interest
        if (
            interest_savings < self._config.snowball_savings_threshold
            and len(active_debts) > self._config.snowball_min_debt_count
        ):
            recommended = PayoffStrategyName.SNOWBALL
            explanation = (
                "Debt snowball is recommended: clearing small balances first "
                "keeps motivation high."
            )
        else:
            recommended = PayoffStrategyName.AVALANCHE
            explanation = "Debt avalanche is recommended to minimize interest paid."

        return PayoffStrategyComparison(
            snowball=snowball,
            avalanche=avalanche,
            recommended=recommended,
            explanation=explanation,
        )


__all__ = [
    "AmortizedPayoffEstimator",
    "PayoffEstimator",
    "PayoffStrategySimulator",
    "QuickPayoffEstimator",
    "empty_payoff_comparison",
]
