"""Credit score heuristic built from a player's debt history and income."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal

from moneygame_backend.finance.amortization import add_months
from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    get_default_finance_configuration,
)
from moneygame_backend.finance.models import (
    CreditFactor,
    CreditScore,
    DebtRecord,
    PlayerAccount,
)
from moneygame_backend.finance.ports import FinanceUnitOfWork  # noqa: TC001
from moneygame_backend.shared.enums import CreditFactorKind, CreditRating, FactorImpact

logger = logging.getLogger(__name__)

BASE_SCORE = Decimal(750)
MIN_SCORE = 300
MAX_SCORE = 850

_ON_TIME_TARGET = Decimal("0.95")
_PAYMENT_HISTORY_SCALE = Decimal(200)
_UTILIZATION_TARGET = Decimal("0.30")
_UTILIZATION_SCALE = Decimal(100)
_UTILIZATION_FLOOR = Decimal(-150)
_CREDIT_MIX_BONUS = Decimal(10)
_CREDIT_MIX_MAX_TYPES = 3
_NEW_CREDIT_PENALTY = Decimal(-20)

_FACTOR_TIPS = {
    CreditFactorKind.PAYMENT_HISTORY: (
        "Pay every installment on time to build a clean payment history."
    ),
    CreditFactorKind.UTILIZATION: (
        "Keep outstanding debt below 30% of your annual income."
    ),
    CreditFactorKind.NEW_CREDIT: "Avoid opening new loans for the next six months.",
}
_POOR_TIPS = (
    "Consider a secured credit product to rebuild your history.",
    "Pay debts off ahead of schedule where you can.",
)
_FAIR_TIPS = (
    "Monitor your credit score regularly.",
    "Aim to clear your debts within two years.",
)
_GOOD_STANDING_TIP = "Your credit score is in good standing; keep it at this level."


def _utcnow() -> datetime:
    return datetime.now(UTC)


def rating_for(score: int) -> CreditRating:
    """Map a bounded score to its rating tier."""
    if score >= 750:
        return CreditRating.EXCELLENT
    if score >= 650:
        return CreditRating.GOOD
    if score >= 550:
        return CreditRating.FAIR
    return CreditRating.POOR


def floor_score(tip: str) -> CreditScore:
    """Return the minimum score carrying a single explanatory *tip*."""
    return CreditScore(
        score=MIN_SCORE,
        rating=CreditRating.POOR,
        factors=(),
        improvement_tips=(tip,),
    )


class CreditScoringEngine:
    """Compute bounded credit scores from five weighted factors."""

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

    def calculate_credit_score(self, player_id: int) -> CreditScore:
        """Score *player_id*, degrading to the floor score instead of raising."""
        try:
            with self._unit_of_work.transaction() as repos:
                account = repos.players.get_account(player_id)
                if account is None:
                    return floor_score("Player data could not be found.")
                debts = repos.debts.list_debts(player_id)
            return self.evaluate(account, debts, today=self._clock().date())
        except Exception:
            logger.exception(
                "Credit score calculation failed", extra={"player_id": player_id}
            )
            return floor_score("An error occurred while calculating the credit score.")

    def evaluate(
        self,
        account: PlayerAccount,
        debts: Sequence[DebtRecord],
        *,
        today: date,
    ) -> CreditScore:
        """Score an account against its full debt history as of *today*."""
        factors = [
            factor
            for factor in (
                self._payment_history(debts, today),
                self._utilization(account, debts),
                self._history_length(),
                self._credit_mix(debts),
                self._new_credit(debts, today),
            )
            if factor is not None
        ]

        raw_score = BASE_SCORE + sum(
            (factor.adjustment for factor in factors), start=Decimal(0)
        )
        rounded = int(raw_score.quantize(Decimal(1), rounding=ROUND_HALF_UP))
        score = max(MIN_SCORE, min(MAX_SCORE, rounded))

        return CreditScore(
            score=score,
            rating=rating_for(score),
            factors=tuple(factors),
            improvement_tips=tuple(self._improvement_tips(factors, score)),
        )

    def _payment_history(
        self, debts: Sequence[DebtRecord], today: date
    ) -> CreditFactor | None:
        if not debts:
            return None
        on_time = sum(1 for debt in debts if not debt.is_overdue(today))
        ratio = Decimal(on_time) / Decimal(len(debts))
        return CreditFactor(
            kind=CreditFactorKind.PAYMENT_HISTORY,
            factor="Payment history",
            impact=(
                FactorImpact.POSITIVE
                if ratio >= _ON_TIME_TARGET
                else FactorImpact.NEGATIVE
            ),
            weight=35,
            description=f"{on_time}/{len(debts)} debts paid on time",
            adjustment=(ratio - _ON_TIME_TARGET) * _PAYMENT_HISTORY_SCALE,
        )

    def _utilization(
        self, account: PlayerAccount, debts: Sequence[DebtRecord]
    ) -> CreditFactor | None:
        active_balance = sum(
            (debt.current_balance for debt in debts if not debt.is_paid_off),
            start=Decimal(0),
        )
        if active_balance == 0:
            return None

        annual_income = account.monthly_income * 12
        if annual_income <= 0:
            # Outstanding debt without income is as bad as utilization gets.
            return CreditFactor(
                kind=CreditFactorKind.UTILIZATION,
                factor="Credit utilization",
                impact=FactorImpact.NEGATIVE,
                weight=30,
                description="Outstanding debt with no income",
                adjustment=_UTILIZATION_FLOOR,
            )

        ratio = active_balance / annual_income
        return CreditFactor(
            kind=CreditFactorKind.UTILIZATION,
            factor="Credit utilization",
            impact=(
                FactorImpact.POSITIVE
                if ratio <= _UTILIZATION_TARGET
                else FactorImpact.NEGATIVE
            ),
            weight=30,
            description=f"Debt equals {ratio * 100:.1f}% of annual income",
            adjustment=max(
                _UTILIZATION_FLOOR, (_UTILIZATION_TARGET - ratio) * _UTILIZATION_SCALE
            ),
        )

    @staticmethod
    def _history_length() -> CreditFactor:
        # Neutral until account age is tracked in the event history.
        return CreditFactor(
            kind=CreditFactorKind.HISTORY_LENGTH,
            factor="Length of credit history",
            impact=FactorImpact.NEUTRAL,
            weight=15,
            description="Insufficient data",
        )

    @staticmethod
    def _credit_mix(debts: Sequence[DebtRecord]) -> CreditFactor:
        type_count = len({debt.loan_type for debt in debts})
        return CreditFactor(
            kind=CreditFactorKind.CREDIT_MIX,
            factor="Credit mix",
            impact=FactorImpact.POSITIVE if type_count >= 2 else FactorImpact.NEUTRAL,
            weight=10,
            description=f"{type_count} loan type(s) in use",
            adjustment=_CREDIT_MIX_BONUS * min(_CREDIT_MIX_MAX_TYPES, type_count),
        )

    def _new_credit(self, debts: Sequence[DebtRecord], today: date) -> CreditFactor:
        window = self._config.new_credit_window_months
        cutoff = add_months(today, -window)
        recent = sum(1 for debt in debts if debt.created_at.date() > cutoff)
        if recent > self._config.new_credit_max_recent:
            return CreditFactor(
                kind=CreditFactorKind.NEW_CREDIT,
                factor="New credit",
                impact=FactorImpact.NEGATIVE,
                weight=10,
                description=f"{recent} loans opened in the last {window} months",
                adjustment=_NEW_CREDIT_PENALTY,
            )
        return CreditFactor(
            kind=CreditFactorKind.NEW_CREDIT,
            factor="New credit",
            impact=FactorImpact.POSITIVE,
            weight=10,
            description="New loans are not opened too often",
        )

    @staticmethod
    def _improvement_tips(factors: Sequence[CreditFactor], score: int) -> list[str]:
        tips = [
            _FACTOR_TIPS[factor.kind]
            for factor in factors
            if factor.impact is FactorImpact.NEGATIVE and factor.kind in _FACTOR_TIPS
        ]
        if score < 550:
            tips.extend(_POOR_TIPS)
        elif score < 650:
            tips.extend(_FAIR_TIPS)
        if not tips:
            tips.append(_GOOD_STANDING_TIP)
        return tips


__all__ = [
    "BASE_SCORE",
    "MAX_SCORE",
    "MIN_SCORE",
    "CreditScoringEngine",
    "floor_score",
    "rating_for",
]
