"""Debt payment processing."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

from moneygame_backend.finance.amortization import add_months, remaining_interest
from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    get_default_finance_configuration,
)
from moneygame_backend.finance.models import (
    DebtRecord,
    PaymentBreakdown,
    PaymentReceipt,
    PaymentRequest,
    PaymentResult,
)
from moneygame_backend.finance.ports import (
    FinanceUnitOfWork,
    FinancialEventLog,
    NullFinancialEventLog,
    append_event,
)
from moneygame_backend.shared.enums import FinancialEventType
from moneygame_backend.shared.events import FinancialEvent
from moneygame_backend.shared.value_objects import ZERO, monthly_rate, quantize_money

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PaymentProcessor:
    """Apply payments to debts one billing period of interest at a time."""

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

    def split_payment(self, debt: DebtRecord, amount: Decimal) -> PaymentBreakdown:
        """
        Split *amount* into interest and principal for a single payment.

        One month of interest is charged first. Paying at least the balance
        closes the debt and reports the interest avoided by not running the
        loan to term; paying no more than the interest leaves the principal
        untouched.
        """
        balance = debt.current_balance
        interest = quantize_money(balance * monthly_rate(debt.interest_rate))

        if amount >= balance:
            projected = remaining_interest(
                balance,
                debt.monthly_payment,
                debt.interest_rate,
                max_months=self._config.max_projection_months,
            )
            return PaymentBreakdown(
                principal=balance - interest,
                interest=interest,
                early_payoff_savings=max(ZERO, projected - interest),
                is_full_payoff=True,
            )
        if amount > interest:
            return PaymentBreakdown(principal=amount - interest, interest=interest)
        return PaymentBreakdown(principal=ZERO, interest=amount)

    def make_payment(self, request: PaymentRequest) -> PaymentResult:
        """Validate and apply *request* as a single atomic unit of work."""
        try:
            with self._unit_of_work.transaction() as repos:
                debt = repos.debts.get_debt(request.debt_id, for_update=True)
                if debt is None or debt.player_id != request.player_id:
                    return self._reject(request, "Debt to pay could not be found.")
                if debt.is_paid_off:
                    return self._reject(request, "This debt has already been paid off.")

                account = repos.players.get_account(request.player_id, for_update=True)
                if account is None:
                    return self._reject(request, "Player data could not be found.")
                available = account.balance_of(request.from_account)
                if available < request.amount:
                    return self._reject(
                        request,
                        f"Insufficient funds: only {available:,.2f} available "
                        f"in {request.from_account}.",
                    )

                now = self._clock()
                breakdown = self.split_payment(debt, request.amount)
                updated = self._apply(debt, request.amount, breakdown, now)
                repos.debts.save_debt(updated)
                new_account_balance = repos.players.adjust_balance(
                    request.player_id, request.from_account, -request.amount
                )
        except Exception as exc:
            logger.exception(
                "Debt payment failed",
                extra={"player_id": request.player_id, "debt_id": request.debt_id},
            )
            return PaymentResult(
                success=False,
                message="An error occurred while processing the payment.",
                error=str(exc),
            )

        logger.info(
            "Debt payment applied",
            extra={
                "player_id": request.player_id,
                "debt_id": updated.debt_id,
                "amount": str(request.amount),
                "remaining_balance": str(updated.current_balance),
            },
        )
        self._record(request, updated, breakdown, now)
        return PaymentResult(
            success=True,
            message=f"Payment of {request.amount:,.2f} applied.",
            payment=PaymentReceipt(
                principal_paid=breakdown.principal,
                interest_paid=breakdown.interest,
                remaining_balance=updated.current_balance,
                new_monthly_payment=updated.monthly_payment,
                new_account_balance=new_account_balance,
                is_paid_off=updated.is_paid_off,
                early_payoff_savings=breakdown.early_payoff_savings,
            ),
        )

    @staticmethod
    def _apply(
        debt: DebtRecord,
        amount: Decimal,
        breakdown: PaymentBreakdown,
        now: datetime,
    ) -> DebtRecord:
        if breakdown.is_full_payoff:
            new_balance = ZERO
        else:
            new_balance = max(ZERO, debt.current_balance - breakdown.principal)

        due_date = debt.due_date
        if new_balance > 0 and amount >= debt.monthly_payment:
            due_date = add_months(due_date, 1)

        # The installment amount stays fixed for the life of the loan.
        return debt.model_copy(
            update={
                "current_balance": new_balance,
                "is_paid_off": new_balance == 0,
                "last_payment_date": now,
                "due_date": due_date,
            }
        )

    def _record(
        self,
        request: PaymentRequest,
        debt: DebtRecord,
        breakdown: PaymentBreakdown,
        now: datetime,
    ) -> None:
        append_event(
            self._event_log,
            FinancialEvent(
                player_id=request.player_id,
                event_type=FinancialEventType.PAYMENT_MADE,
                amount=request.amount,
                debt_id=debt.debt_id,
                payload={
                    "payment_type": str(request.payment_type),
                    "from_account": str(request.from_account),
                    "principal": str(breakdown.principal),
                    "interest": str(breakdown.interest),
                },
                occurred_at=now,
            ),
        )
        if debt.is_paid_off:
            logger.info(
                "Debt paid off",
                extra={"player_id": request.player_id, "debt_id": debt.debt_id},
            )
            append_event(
                self._event_log,
                FinancialEvent(
                    player_id=request.player_id,
                    event_type=FinancialEventType.DEBT_PAID_OFF,
                    amount=debt.original_amount,
                    debt_id=debt.debt_id,
                    occurred_at=now,
                ),
            )

    @staticmethod
    def _reject(request: PaymentRequest, message: str) -> PaymentResult:
        logger.info(
            "Debt payment rejected",
            extra={
                "player_id": request.player_id,
                "debt_id": request.debt_id,
                "reason": message,
            },
        )
        return PaymentResult(success=False, message=message, error=message)


__all__ = ["PaymentProcessor"]
