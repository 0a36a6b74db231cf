from __future__ import annotations

from decimal import Decimal

from moneygame_backend.finance import (
    AmortizedPayoffEstimator,
    FinanceConfiguration,
    InMemoryFinanceStore,
    PayoffStrategySimulator,
    QuickPayoffEstimator,
)
from moneygame_backend.shared import PayoffStrategyName


def _ids(estimate) -> list[int]:
    return [entry.debt_id for entry in estimate.order]


def test_orderings_follow_balance_and_rate(make_debt) -> None:
    simulator = PayoffStrategySimulator(InMemoryFinanceStore())
    debts = [
        make_debt(1, balance=20_000, rate="8.5", payment="800.00"),
        make_debt(2, balance=6_000, rate="12.0", payment="300.00"),
        make_debt(3, balance=9_000, rate="15.0", payment="400.00"),
    ]

    comparison = simulator.compare(debts)

    assert _ids(comparison.snowball) == [2, 3, 1]
    assert _ids(comparison.avalanche) == [3, 2, 1]


def test_quick_estimate_uses_totals(make_debt) -> None:
    estimate = QuickPayoffEstimator().estimate(
        [
            make_debt(1, balance=20_000, payment="800.00"),
            make_debt(2, balance=6_000, payment="300.00"),
        ]
    )

    assert estimate.total_months == 24
    assert estimate.total_interest == Decimal("2600.00")


def test_quick_estimate_without_payments_has_no_timeline(make_debt) -> None:
    estimate = QuickPayoffEstimator().estimate([make_debt(1, payment="0")])

    assert estimate.total_months == 0


def test_few_debts_recommend_avalanche(make_debt) -> None:
    simulator = PayoffStrategySimulator(InMemoryFinanceStore())
    debts = [make_debt(index, balance=1_000 * index) for index in range(1, 4)]

    comparison = simulator.compare(debts)

    assert comparison.recommended is PayoffStrategyName.AVALANCHE
    assert comparison.interest_savings == Decimal(0)


def test_many_debts_with_small_savings_recommend_snowball(make_debt) -> None:
    simulator = PayoffStrategySimulator(InMemoryFinanceStore())
    debts = [make_debt(index, balance=1_000 * index) for index in range(1, 5)]

    comparison = simulator.compare(debts)

    assert comparison.recommended is PayoffStrategyName.SNOWBALL


def test_large_savings_override_debt_count(make_debt) -> None:
    config = FinanceConfiguration(snowball_savings_threshold=Decimal(0))
    simulator = PayoffStrategySimulator(InMemoryFinanceStore(), configuration=config)
    debts = [make_debt(index, balance=1_000 * index) for index in range(1, 5)]

    assert simulator.compare(debts).recommended is PayoffStrategyName.AVALANCHE


def test_no_active_debts(store: InMemoryFinanceStore, make_profile, make_debt) -> None:
    store.add_player(make_profile())
    store.add_debt(make_debt(1, balance=0, original=5_000))
    simulator = PayoffStrategySimulator(store)

    comparison = simulator.calculate_payoff_strategy(1)

    assert comparison.recommended is PayoffStrategyName.SNOWBALL
    assert comparison.explanation == "There is no debt to pay off."
    assert comparison.snowball.order == ()


def test_amortized_estimator_without_interest(make_debt) -> None:
    estimate = AmortizedPayoffEstimator().estimate(
        [make_debt(1, balance=12_000, rate="0", payment="1000.00")]
    )

    assert estimate.total_months == 12
    assert estimate.total_interest == Decimal(0)


def test_amortized_avalanche_never_costs_more(make_debt) -> None:
    simulator = PayoffStrategySimulator(
        InMemoryFinanceStore(), estimator=AmortizedPayoffEstimator()
    )
    debts = [
        make_debt(1, balance=5_000, rate="5.0", payment="200.00"),
        make_debt(2, balance=10_000, rate="20.0", payment="300.00"),
    ]

    comparison = simulator.compare(debts)

    assert comparison.avalanche.total_interest <= comparison.snowball.total_interest
    assert comparison.snowball.total_months > 0


def test_amortized_estimator_stops_at_the_cap(make_debt) -> None:
    estimate = AmortizedPayoffEstimator(max_months=24).estimate(
        [make_debt(1, balance=100_000, payment="500.00")]
    )

    assert estimate.total_months == 24


def test_storage_failure_is_reported(broken_uow) -> None:
    comparison = PayoffStrategySimulator(broken_uow).calculate_payoff_strategy(1)

    assert comparison.recommended is PayoffStrategyName.SNOWBALL
    assert comparison.explanation == (
        "An error occurred while calculating the payoff strategy."
    )
