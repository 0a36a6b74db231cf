"""Aggregated view over a player's active debts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal

from moneygame_backend.finance.amortization import (
    payoff_timeline_months,
    remaining_interest,
)
from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    get_default_finance_configuration,
)
from moneygame_backend.finance.models import (
    DebtRecommendation,
    DebtRecord,
    DebtSummary,
    DebtTypeBreakdown,
    PlayerAccount,
    UpcomingPayment,
)
from moneygame_backend.finance.ports import FinanceUnitOfWork  # noqa: TC001
from moneygame_backend.shared.enums import LoanType, Priority, RecommendationType
from moneygame_backend.shared.value_objects import ZERO, quantize_rate

logger = logging.getLogger(__name__)

_HUNDRED = Decimal(100)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def empty_debt_summary() -> DebtSummary:
    """Summary for a player without active debts."""
    return DebtSummary(
        recommendations=(
            DebtRecommendation(
                type=RecommendationType.EMERGENCY_FUND,
                title="Build an emergency fund",
                description="Set aside three to six months of expenses.",
                priority=Priority.HIGH,
            ),
        ),
    )


@dataclass(slots=True)
class _TypeAccumulator:
    loan_type: LoanType
    count: int = 0
    total_balance: Decimal = field(default=ZERO)
    total_monthly_payment: Decimal = field(default=ZERO)
    average_rate: Decimal = field(default=ZERO)

    def add(self, debt: DebtRecord) -> None:
        self.count += 1
        self.total_balance += debt.current_balance
        self.total_monthly_payment += debt.monthly_payment
        self.average_rate = (
            self.average_rate * (self.count - 1) + debt.interest_rate
        ) / self.count

    def to_breakdown(self, total_debt: Decimal) -> DebtTypeBreakdown:
        allocation = self.total_balance / total_debt * _HUNDRED if total_debt else ZERO
        return DebtTypeBreakdown(
            loan_type=self.loan_type,
            count=self.count,
            total_balance=self.total_balance,
            total_monthly_payment=self.total_monthly_payment,
            average_rate=self.average_rate,
            allocation=quantize_rate(allocation),
        )


class DebtPortfolioAnalyzer:
    """Summarize active debts into ratios, timelines and recommendations."""

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

    def get_debt_summary(self, player_id: int) -> DebtSummary | None:
        """Return the portfolio summary, or ``None`` when the player is unknown."""
        try:
            with self._unit_of_work.transaction() as repos:
                account = repos.players.get_account(player_id)
                if account is None:
                    return None
                debts = repos.debts.list_debts(player_id, active_only=True)
            return self.summarize(account, debts, today=self._clock().date())
        except Exception:
            logger.exception("Debt summary failed", extra={"player_id": player_id})
            return None

    def summarize(
        self,
        account: PlayerAccount,
        active_debts: Sequence[DebtRecord],
        *,
        today: date,
    ) -> DebtSummary:
        """Aggregate *active_debts* for a player holding *account*."""
        if not active_debts:
            return empty_debt_summary()

        cap = self._config.max_projection_months
        total_debt = ZERO
        total_payments = ZERO
        total_interest = ZERO
        by_type: dict[LoanType, _TypeAccumulator] = {}
        for debt in active_debts:
            total_debt += debt.current_balance
            total_payments += debt.monthly_payment
            total_interest += remaining_interest(
                debt.current_balance,
                debt.monthly_payment,
                debt.interest_rate,
                max_months=cap,
            )
            by_type.setdefault(debt.loan_type, _TypeAccumulator(debt.loan_type)).add(
                debt
            )

        monthly_income = account.monthly_income
        if monthly_income > 0:
            debt_to_income = total_payments / monthly_income * _HUNDRED
            utilization = total_debt / (monthly_income * 12) * _HUNDRED
        else:
            debt_to_income = ZERO
            utilization = ZERO

        average_rate = sum(
            (debt.interest_rate for debt in active_debts), start=ZERO
        ) / len(active_debts)
        timeline = max(
            payoff_timeline_months(
                debt.current_balance,
                debt.monthly_payment,
                debt.interest_rate,
                never=cap,
            )
            for debt in active_debts
        )

        return DebtSummary(
            total_debt=total_debt,
            total_monthly_payments=total_payments,
            average_interest_rate=average_rate,
            debt_to_income_ratio=quantize_rate(debt_to_income),
            credit_utilization=quantize_rate(utilization),
            payoff_timeline_months=timeline,
            total_interest_remaining=total_interest,
            debts_by_type=tuple(
                accumulator.to_breakdown(total_debt)
                for accumulator in by_type.values()
            ),
            upcoming_payments=tuple(self.upcoming_payments(active_debts, today=today)),
            recommendations=tuple(
                self.recommendations(
                    account, active_debts, debt_to_income=debt_to_income
                )
            ),
        )

    @staticmethod
    def upcoming_payments(
        active_debts: Sequence[DebtRecord], *, today: date
    ) -> list[UpcomingPayment]:
        """Return the next installment of every active debt by due date."""
        ordered = sorted(active_debts, key=lambda debt: (debt.due_date, debt.debt_id))
        return [
            UpcomingPayment(
                debt_id=debt.debt_id,
                debt_name=f"{debt.loan_type} loan",
                due_date=debt.due_date,
                minimum_payment=debt.monthly_payment,
                current_balance=debt.current_balance,
                is_overdue=debt.is_overdue(today),
                days_past_due=debt.days_past_due(today),
            )
            for debt in ordered
        ]

    def recommendations(
        self,
        account: PlayerAccount,
        active_debts: Sequence[DebtRecord],
        *,
        debt_to_income: Decimal,
    ) -> list[DebtRecommendation]:
        """Apply the independent advice rules to a non-empty portfolio."""
        config = self._config
        advice: list[DebtRecommendation] = []

        if debt_to_income > config.summary_dti_alert_pct:
            advice.append(
                DebtRecommendation(
                    type=RecommendationType.PAYOFF_STRATEGY,
                    title="Lower your debt-to-income ratio",
                    description=(
                        "Debt payments take a large share of income; "
                        "accelerate repayment or raise income."
                    ),
                    priority=Priority.HIGH,
                )
            )

        high_interest = [
            debt
            for debt in active_debts
            if debt.interest_rate > config.high_interest_rate
        ]
        if len(high_interest) > 1:
            advice.append(
                DebtRecommendation(
                    type=RecommendationType.CONSOLIDATION,
                    title="Consolidate high-interest debt",
                    description="Consider consolidating debts to lower the interest rate.",
                    priority=Priority.MEDIUM,
                    potential_savings=config.consolidation_savings_estimate,
                )
            )

        if account.savings < account.monthly_income * config.emergency_fund_months:
            advice.append(
                DebtRecommendation(
                    type=RecommendationType.EMERGENCY_FUND,
                    title="Grow your emergency fund",
                    description=(
                        "Emergency savings are too low; keep three to six months "
                        "of expenses."
                    ),
                    priority=Priority.MEDIUM,
                )
            )
        return advice


__all__ = ["DebtPortfolioAnalyzer", "empty_debt_summary"]
