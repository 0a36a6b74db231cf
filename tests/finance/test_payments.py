from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from moneygame_backend.finance import (
    InMemoryFinanceStore,
    InMemoryFinancialEventLog,
    PaymentProcessor,
    PaymentRequest,
    remaining_interest,
)
from moneygame_backend.shared import AccountKind, FinancialEventType


@pytest.fixture
def processor(
    store: InMemoryFinanceStore, event_log: InMemoryFinancialEventLog, clock
) -> PaymentProcessor:
    return PaymentProcessor(store, event_log=event_log, clock=clock)


@pytest.fixture
def seeded(store: InMemoryFinanceStore, make_profile, make_debt) -> None:
    store.add_player(make_profile(cash=200_000, savings=10_000, salary=30_000))
    store.add_debt(make_debt(1, balance=100_000))


def _request(amount: str | int, **overrides) -> PaymentRequest:
    return PaymentRequest(
        player_id=overrides.pop("player_id", 1),
        debt_id=overrides.pop("debt_id", 1),
        amount=Decimal(amount),
        **overrides,
    )


@pytest.mark.usefixtures("seeded")
def test_installment_is_split_into_interest_and_principal(
    processor: PaymentProcessor, read_debt, read_account, now
) -> None:
    result = processor.make_payment(_request("2224.44"))

    assert result.success is True
    assert result.payment is not None
    assert result.payment.interest_paid == Decimal("1000.00")
    assert result.payment.principal_paid == Decimal("1224.44")
    assert result.payment.remaining_balance == Decimal("98775.56")
    assert result.payment.new_monthly_payment == Decimal("2224.44")
    assert result.payment.new_account_balance == Decimal("197775.56")
    assert result.payment.early_payoff_savings is None

    debt = read_debt(1)
    assert debt.current_balance == Decimal("98775.56")
    assert debt.last_payment_date == now
    assert debt.due_date == date(2026, 3, 1)
    assert debt.monthly_payment == Decimal("2224.44")
    assert read_account(1).cash == Decimal("197775.56")


@pytest.mark.usefixtures("seeded")
def test_payment_below_interest_leaves_balance_unchanged(
    processor: PaymentProcessor, read_debt, read_account
) -> None:
    result = processor.make_payment(_request(500))

    assert result.success is True
    assert result.payment.principal_paid == Decimal(0)
    assert result.payment.interest_paid == Decimal("500.00")
    assert read_debt(1).current_balance == Decimal("100000.00")
    assert read_debt(1).due_date == date(2026, 2, 1)
    assert read_account(1).cash == Decimal("199500.00")


@pytest.mark.usefixtures("seeded")
def test_payment_equal_to_interest_is_interest_only(
    processor: PaymentProcessor, read_debt
) -> None:
    result = processor.make_payment(_request(1_000))

    assert result.payment.principal_paid == Decimal(0)
    assert read_debt(1).current_balance == Decimal("100000.00")


@pytest.mark.usefixtures("seeded")
def test_overpayment_closes_the_debt(
    processor: PaymentProcessor,
    event_log: InMemoryFinancialEventLog,
    read_debt,
    read_account,
) -> None:
    result = processor.make_payment(_request(150_000))

    assert result.success is True
    assert result.payment.is_paid_off is True
    assert result.payment.remaining_balance == Decimal(0)
    assert result.payment.interest_paid == Decimal("1000.00")
    assert result.payment.principal_paid == Decimal("99000.00")
    expected_savings = (
        remaining_interest(Decimal(100_000), Decimal("2224.44"), Decimal(12))
        - Decimal(1_000)
    )
    assert result.payment.early_payoff_savings == expected_savings
    assert result.payment.early_payoff_savings > 0

    debt = read_debt(1)
    assert debt.is_paid_off is True
    assert debt.current_balance == Decimal(0)
    assert read_account(1).cash == Decimal("50000.00")
    assert [event.event_type for event in event_log.fetch(1)] == [
        FinancialEventType.PAYMENT_MADE,
        FinancialEventType.DEBT_PAID_OFF,
    ]


@pytest.mark.usefixtures("seeded")
def test_payment_can_be_drawn_from_savings(
    processor: PaymentProcessor, read_account
) -> None:
    result = processor.make_payment(
        _request("2224.44", from_account=AccountKind.SAVINGS)
    )

    assert result.success is True
    assert result.payment.new_account_balance == Decimal("7775.56")
    account = read_account(1)
    assert account.savings == Decimal("7775.56")
    assert account.cash == Decimal("200000.00")


@pytest.mark.usefixtures("seeded")
@pytest.mark.parametrize(
    ("player_id", "debt_id"),
    [(1, 99), (2, 1)],
)
def test_unknown_or_foreign_debt_is_a_soft_failure(
    processor: PaymentProcessor, player_id: int, debt_id: int
) -> None:
    result = processor.make_payment(
        _request(100, player_id=player_id, debt_id=debt_id)
    )

    assert result.success is False
    assert result.message == "Debt to pay could not be found."
    assert result.payment is None


@pytest.mark.usefixtures("seeded")
def test_insufficient_funds_is_a_soft_failure(
    processor: PaymentProcessor, read_debt, read_account
) -> None:
    result = processor.make_payment(
        _request(20_000, from_account=AccountKind.SAVINGS)
    )

    assert result.success is False
    assert result.message == "Insufficient funds: only 10,000.00 available in savings."
    assert read_debt(1).current_balance == Decimal("100000.00")
    assert read_account(1).savings == Decimal("10000.00")


def test_paid_off_debt_rejects_further_payments(
    processor: PaymentProcessor, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(cash=1_000))
    store.add_debt(make_debt(1, balance=0, original=5_000))

    result = processor.make_payment(_request(100))

    assert result.success is False
    assert result.message == "This debt has already been paid off."


@pytest.mark.usefixtures("seeded")
def test_balance_never_increases_across_payments(
    processor: PaymentProcessor, read_debt
) -> None:
    balances = [read_debt(1).current_balance]
    for amount in ("500", "2224.44", "10000", "1000", "3000.50"):
        assert processor.make_payment(_request(amount)).success is True
        balances.append(read_debt(1).current_balance)

    assert balances == sorted(balances, reverse=True)
    assert all(Decimal(0) <= balance <= Decimal(100_000) for balance in balances)


@pytest.mark.usefixtures("seeded")
def test_failed_account_debit_rolls_back_the_debt_update(
    store: InMemoryFinanceStore,
    failing_balance_uow,
    event_log: InMemoryFinancialEventLog,
    read_debt,
    clock,
) -> None:
    processor = PaymentProcessor(failing_balance_uow, event_log=event_log, clock=clock)

    result = processor.make_payment(_request("2224.44"))

    assert result.success is False
    assert result.message == "An error occurred while processing the payment."
    assert result.error == "ledger offline"
    debt = read_debt(1)
    assert debt.current_balance == Decimal("100000.00")
    assert debt.last_payment_date is None
    assert event_log.fetch(1) == ()


@pytest.mark.usefixtures("seeded")
def test_partial_installment_keeps_the_due_date(
    processor: PaymentProcessor, read_debt
) -> None:
    result = processor.make_payment(_request(2_000))

    assert result.payment.principal_paid == Decimal("1000.00")
    assert read_debt(1).current_balance == Decimal("99000.00")
    assert read_debt(1).due_date == date(2026, 2, 1)


@pytest.mark.parametrize("amount", ["0.001", "0.004", "0", "-1"])
def test_amounts_below_one_cent_are_rejected(amount: str) -> None:
    with pytest.raises(ValidationError):
        _request(amount)


def test_half_cent_rounds_up_to_one_cent() -> None:
    assert _request("0.005").amount == Decimal("0.01")
