"""Facade exposing the finance engine to the transport and turn layers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    get_default_finance_configuration,
)
from moneygame_backend.finance.credit_scoring import CreditScoringEngine
from moneygame_backend.finance.models import (
    CreditScore,
    DebtRecord,
    DebtSummary,
    LoanApplication,
    LoanApproval,
    PaymentRequest,
    PaymentResult,
    PayoffStrategyComparison,
    PlayerState,
    PlayerWinCondition,
)
from moneygame_backend.finance.payments import PaymentProcessor
from moneygame_backend.finance.payoff import PayoffEstimator, PayoffStrategySimulator
from moneygame_backend.finance.player_state import PlayerFinancialStateCalculator
from moneygame_backend.finance.portfolio import DebtPortfolioAnalyzer
from moneygame_backend.finance.ports import (
    FinanceUnitOfWork,
    FinancialEventLog,
    NullFinancialEventLog,
)
from moneygame_backend.finance.underwriting import LoanUnderwriter
from moneygame_backend.shared.events import FinancialEvent  # noqa: TC001

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FinanceService:
    """Wire the finance components around a shared unit of work."""

    def __init__(
        self,
        unit_of_work: FinanceUnitOfWork,
        *,
        event_log: FinancialEventLog | None = None,
        configuration: FinanceConfiguration | None = None,
        estimator: PayoffEstimator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        config = configuration or get_default_finance_configuration()
        self._unit_of_work = unit_of_work
        self._event_log = event_log or NullFinancialEventLog()
        self.underwriter = LoanUnderwriter(
            unit_of_work, event_log=self._event_log, configuration=config, clock=clock
        )
        self.payments = PaymentProcessor(
            unit_of_work, event_log=self._event_log, configuration=config, clock=clock
        )
        self.credit_scoring = CreditScoringEngine(
            unit_of_work, configuration=config, clock=clock
        )
        self.portfolio = DebtPortfolioAnalyzer(
            unit_of_work, configuration=config, clock=clock
        )
        self.payoff = PayoffStrategySimulator(
            unit_of_work, estimator=estimator, configuration=config
        )
        self.player_state = PlayerFinancialStateCalculator(
            unit_of_work, configuration=config, clock=clock
        )

    def apply_for_loan(self, application: LoanApplication) -> LoanApproval:
        return self.underwriter.apply_for_loan(application)

    def make_payment(self, request: PaymentRequest) -> PaymentResult:
        return self.payments.make_payment(request)

    def get_debt_summary(self, player_id: int) -> DebtSummary | None:
        return self.portfolio.get_debt_summary(player_id)

    def calculate_credit_score(self, player_id: int) -> CreditScore:
        return self.credit_scoring.calculate_credit_score(player_id)

    def get_player_debts(self, player_id: int) -> list[DebtRecord]:
        """Return every debt of *player_id*, paid off or not, by due date."""
        try:
            with self._unit_of_work.transaction() as repos:
                return repos.debts.list_debts(player_id)
        except Exception:
            logger.exception(
                "Listing player debts failed", extra={"player_id": player_id}
            )
            return []

    def calculate_payoff_strategy(self, player_id: int) -> PayoffStrategyComparison:
        return self.payoff.calculate_payoff_strategy(player_id)

    def get_player_state(self, player_id: int) -> PlayerState:
        """Return the player's snapshot; raises ``PlayerNotFoundError``."""
        return self.player_state.get_player_state(player_id)

    def check_win_condition(self, player_id: int) -> PlayerWinCondition:
        return self.player_state.check_win_condition(player_id)

    def get_financial_history(self, player_id: int) -> tuple[FinancialEvent, ...]:
        """Return the recorded loan and payment events of *player_id*."""
        try:
            return self._event_log.fetch(player_id)
        except Exception:
            logger.exception(
                "Reading financial history failed", extra={"player_id": player_id}
            )
            return ()


__all__ = ["FinanceService"]
