"""Fixed-rate amortization math used by lending, payments and projections."""

from __future__ import annotations

import calendar
from datetime import date
from decimal import Decimal
from math import ceil

from moneygame_backend.finance.models import LoanTerms
from moneygame_backend.shared.value_objects import (
    ZERO,
    as_decimal,
    monthly_rate,
    quantize_money,
)

MAX_PROJECTION_MONTHS = 360

_ONE = Decimal(1)


def monthly_payment(
    principal: Decimal | int | str,
    annual_rate_pct: Decimal | int | str,
    term_months: int,
) -> Decimal:
    """
    Return the fixed installment that amortizes *principal* over *term_months*.

    Uses ``P·r·(1+r)^n / ((1+r)^n − 1)`` with ``r`` the monthly rate. A zero
    rate makes the denominator vanish, so the principal is split evenly.

    Example:
        100,000 at 12% over 60 months → 2,224.44
    """
    if term_months <= 0:
        msg = f"Loan term must be positive, got {term_months}."
        raise ValueError(msg)

    amount = as_decimal(principal)
    rate = monthly_rate(as_decimal(annual_rate_pct))
    if rate == 0:
        return quantize_money(amount / term_months)

    growth = (_ONE + rate) ** term_months
    return quantize_money(amount * rate * growth / (growth - _ONE))


def remaining_interest(
    balance: Decimal | int | str,
    payment: Decimal | int | str,
    annual_rate_pct: Decimal | int | str,
    *,
    max_months: int = MAX_PROJECTION_MONTHS,
) -> Decimal:
    """
    Project the interest still to be paid if *payment* is made every month.

    The projection stops after *max_months* iterations, and as soon as a
    month's payment no longer covers its interest; whatever interest was
    accrued up to that point is returned.
    """
    remaining = as_decimal(balance)
    installment = as_decimal(payment)
    rate = monthly_rate(as_decimal(annual_rate_pct))

    total_interest = ZERO
    months = 0
    while remaining > 0 and months < max_months:
        interest = remaining * rate
        principal = min(installment - interest, remaining)
        total_interest += interest
        remaining -= principal
        months += 1
        if principal <= 0:
            break

    return quantize_money(total_interest)


def payoff_timeline_months(
    balance: Decimal | int | str,
    payment: Decimal | int | str,
    annual_rate_pct: Decimal | int | str,
    *,
    never: int = MAX_PROJECTION_MONTHS,
) -> int:
    """
    Return the number of monthly payments needed to clear *balance*.

    Closed form ``ceil(ln(1 + B·r / (M − B·r)) / ln(1 + r))``. When the payment
    does not exceed the monthly interest the debt never amortizes and *never*
    is returned instead.
    """
    outstanding = as_decimal(balance)
    installment = as_decimal(payment)
    if outstanding <= 0:
        return 0

    rate = monthly_rate(as_decimal(annual_rate_pct))
    if rate == 0:
        if installment <= 0:
            return never
        return ceil(outstanding / installment)

    interest = outstanding * rate
    if installment <= interest:
        return never

    months = (_ONE + interest / (installment - interest)).ln() / (_ONE + rate).ln()
    return ceil(months)


def first_day_of_next_month(day: date) -> date:
    """Return the first calendar day of the month following *day*."""
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def add_months(day: date, months: int) -> date:
    """Shift *day* by *months*, clamping to the end of shorter months."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def loan_terms(
    amount: Decimal | int | str,
    annual_rate_pct: Decimal | int | str,
    term_months: int,
    *,
    today: date,
) -> LoanTerms:
    """Build the amortized terms for a new loan originated on *today*."""
    installment = monthly_payment(amount, annual_rate_pct, term_months)
    total_payments = installment * term_months
    return LoanTerms(
        interest_rate=as_decimal(annual_rate_pct),
        term_months=term_months,
        monthly_payment=installment,
        total_payments=total_payments,
        total_interest=total_payments - as_decimal(amount),
        due_date=first_day_of_next_month(today),
    )


__all__ = [
    "MAX_PROJECTION_MONTHS",
    "add_months",
    "first_day_of_next_month",
    "loan_terms",
    "monthly_payment",
    "payoff_timeline_months",
    "remaining_interest",
]
