"""Loan eligibility checks and origination."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from decimal import Decimal

from moneygame_backend.finance.amortization import loan_terms
from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    get_default_finance_configuration,
)
from moneygame_backend.finance.models import (
    ApprovedLoan,
    DebtRecord,
    LoanApplication,
    LoanApproval,
    NewDebt,
    PlayerAccount,
)
from moneygame_backend.finance.ports import (
    FinanceUnitOfWork,
    FinancialEventLog,
    NullFinancialEventLog,
    append_event,
)
from moneygame_backend.shared.enums import AccountKind, FinancialEventType
from moneygame_backend.shared.events import FinancialEvent

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LoanUnderwriter:
    """Approve or reject loan applications and book approved loans."""

    def __init__(
        self,
        unit_of_work: FinanceUnitOfWork,
        *,
        event_log: FinancialEventLog | None = None,
        configuration: FinanceConfiguration | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._unit_of_work = unit_of_work
        self._event_log = event_log or NullFinancialEventLog()
        self._config = configuration or get_default_finance_configuration()
        self._clock = clock

    def check_eligibility(
        self,
        application: LoanApplication,
        account: PlayerAccount | None,
        active_debts: Sequence[DebtRecord],
    ) -> str | None:
        """Return the first failed gate as a reason, or ``None`` when eligible."""
        if account is None:
            return "Player data could not be found."

        monthly_income = account.monthly_income
        if monthly_income < self._config.minimum_monthly_income:
            return "Monthly income is too low to qualify for a loan."

        existing_payments = sum(
            (debt.monthly_payment for debt in active_debts), start=Decimal(0)
        )
        if monthly_income <= 0:
            if existing_payments > 0:
                return "Debt-to-income ratio is too high."
        elif existing_payments / monthly_income > self._config.max_debt_to_income:
            return "Debt-to-income ratio is too high."

        max_amount = monthly_income * self._config.max_loan_income_months
        if application.amount > max_amount:
            return f"Requested amount exceeds the approvable maximum of {max_amount:,.2f}."
        return None

    def apply_for_loan(self, application: LoanApplication) -> LoanApproval:
        """Underwrite *application*; approved loans credit the player's cash."""
        player_id = application.player_id
        try:
            with self._unit_of_work.transaction() as repos:
                account = repos.players.get_account(player_id, for_update=True)
                active_debts = repos.debts.list_debts(player_id, active_only=True)
                reason = self.check_eligibility(application, account, active_debts)
                if reason is not None:
                    logger.info(
                        "Loan application rejected",
                        extra={"player_id": player_id, "reason": reason},
                    )
                    return LoanApproval(approved=False, message=reason, reason=reason)

                now = self._clock()
                rate = self._config.rate_for(application.loan_type)
                term = (
                    application.requested_term_months
                    or self._config.default_term_months
                )
                terms = loan_terms(application.amount, rate, term, today=now.date())
                debt = repos.debts.create_debt(
                    NewDebt(
                        player_id=player_id,
                        loan_type=application.loan_type,
                        original_amount=application.amount,
                        interest_rate=terms.interest_rate,
                        monthly_payment=terms.monthly_payment,
                        term_months=terms.term_months,
                        due_date=terms.due_date,
                        created_at=now,
                        description=application.purpose,
                        collateral_asset_id=application.collateral_asset_id,
                    )
                )
                repos.players.adjust_balance(
                    player_id, AccountKind.CASH, application.amount
                )
        except Exception as exc:
            logger.exception(
                "Loan application failed", extra={"player_id": player_id}
            )
            return LoanApproval(
                approved=False,
                message="An error occurred while applying for the loan.",
                reason=str(exc),
            )

        logger.info(
            "Loan approved",
            extra={
                "player_id": player_id,
                "debt_id": debt.debt_id,
                "loan_type": str(debt.loan_type),
                "amount": str(debt.original_amount),
            },
        )
        append_event(
            self._event_log,
            FinancialEvent(
                player_id=player_id,
                event_type=FinancialEventType.LOAN_APPROVED,
                amount=debt.original_amount,
                debt_id=debt.debt_id,
                message=application.purpose or None,
                payload={"loan_type": str(debt.loan_type)},
                occurred_at=now,
            ),
        )
        return LoanApproval(
            approved=True,
            message=f"Loan of {debt.original_amount:,.2f} approved.",
            terms=ApprovedLoan(
                loan_id=debt.debt_id,
                amount=debt.original_amount,
                interest_rate=terms.interest_rate,
                term_months=terms.term_months,
                monthly_payment=terms.monthly_payment,
                total_payments=terms.total_payments,
                total_interest=terms.total_interest,
                due_date=terms.due_date,
            ),
        )


__all__ = ["LoanUnderwriter"]
