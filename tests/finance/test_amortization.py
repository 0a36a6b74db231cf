from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from moneygame_backend.finance.amortization import (
    add_months,
    first_day_of_next_month,
    loan_terms,
    monthly_payment,
    payoff_timeline_months,
    remaining_interest,
)
from moneygame_backend.shared import monthly_rate


def _balance_after_schedule(principal: Decimal, rate: Decimal, term: int) -> Decimal:
    payment = monthly_payment(principal, rate, term)
    balance = principal
    for _ in range(term):
        balance = balance + balance * monthly_rate(rate) - payment
    return balance


def test_monthly_payment_matches_standard_amortization() -> None:
    assert monthly_payment(Decimal(100_000), Decimal(12), 60) == Decimal("2224.44")


def test_monthly_payment_with_zero_rate_splits_principal_evenly() -> None:
    assert monthly_payment(Decimal(1_200), Decimal(0), 12) == Decimal("100.00")


def test_monthly_payment_rejects_non_positive_term() -> None:
    with pytest.raises(ValueError, match="Loan term must be positive"):
        monthly_payment(Decimal(1_000), Decimal(12), 0)


@pytest.mark.parametrize(
    ("principal", "rate", "term"),
    [
        (Decimal(100_000), Decimal(12), 60),
        (Decimal(360_000), Decimal("8.5"), 120),
        (Decimal(25_000), Decimal(15), 24),
        (Decimal(5_000), Decimal("0.5"), 6),
    ],
)
def test_fixed_payment_amortizes_balance_to_zero(
    principal: Decimal, rate: Decimal, term: int
) -> None:
    residual = _balance_after_schedule(principal, rate, term)

    # Cent rounding of the installment leaves at most a cent per period.
    assert abs(residual) <= Decimal("0.01") * term * 2


def test_loan_terms_total_interest_matches_payment_schedule() -> None:
    terms = loan_terms(Decimal(100_000), Decimal(12), 60, today=date(2026, 1, 15))

    assert terms.monthly_payment == Decimal("2224.44")
    assert terms.total_payments == Decimal("133466.40")
    assert terms.total_interest == Decimal("33466.40")
    assert terms.monthly_payment * terms.term_months == (
        Decimal(100_000) + terms.total_interest
    )
    assert terms.due_date == date(2026, 2, 1)


def test_remaining_interest_of_fresh_loan_approximates_total_interest() -> None:
    terms = loan_terms(Decimal(100_000), Decimal(12), 60, today=date(2026, 1, 15))

    projected = remaining_interest(
        Decimal(100_000), terms.monthly_payment, terms.interest_rate
    )

    assert abs(projected - terms.total_interest) < Decimal(1)


def test_remaining_interest_respects_iteration_cap() -> None:
    assert remaining_interest(
        Decimal(1_000), Decimal(20), Decimal(12), max_months=3
    ) == Decimal("29.70")


def test_remaining_interest_stops_when_payment_does_not_cover_interest() -> None:
    # First month accrues 10.00 of interest against a 5.00 payment.
    assert remaining_interest(Decimal(1_000), Decimal(5), Decimal(12)) == Decimal(
        "10.00"
    )


def test_remaining_interest_of_settled_balance_is_zero() -> None:
    assert remaining_interest(Decimal(0), Decimal(100), Decimal(12)) == Decimal("0.00")


def test_payoff_timeline_returns_sentinel_when_payment_only_covers_interest() -> None:
    assert payoff_timeline_months(Decimal(100_000), Decimal(1_000), Decimal(12)) == 360
    assert payoff_timeline_months(Decimal(100_000), Decimal(999), Decimal(12)) == 360


def test_payoff_timeline_of_fresh_loan_is_close_to_its_term() -> None:
    months = payoff_timeline_months(Decimal(100_000), Decimal("2224.44"), Decimal(12))

    assert months in {60, 61}


def test_payoff_timeline_shrinks_with_larger_payments() -> None:
    regular = payoff_timeline_months(Decimal(100_000), Decimal("2224.44"), Decimal(12))
    accelerated = payoff_timeline_months(Decimal(100_000), Decimal(4_000), Decimal(12))

    assert accelerated < regular


def test_payoff_timeline_edge_cases() -> None:
    assert payoff_timeline_months(Decimal(0), Decimal(100), Decimal(12)) == 0
    assert payoff_timeline_months(Decimal(1_200), Decimal(100), Decimal(0)) == 12
    assert payoff_timeline_months(Decimal(1_000), Decimal(300), Decimal(0)) == 4
    assert payoff_timeline_months(Decimal(1_000), Decimal(0), Decimal(0)) == 360


def test_first_day_of_next_month_rolls_over_year_end() -> None:
    assert first_day_of_next_month(date(2026, 1, 15)) == date(2026, 2, 1)
    assert first_day_of_next_month(date(2026, 12, 31)) == date(2027, 1, 1)


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 3, 15), -6) == date(2025, 9, 15)
    assert add_months(date(2026, 11, 1), 2) == date(2027, 1, 1)
