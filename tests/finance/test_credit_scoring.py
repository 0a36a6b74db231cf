from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from moneygame_backend.finance import CreditScoringEngine, InMemoryFinanceStore
from moneygame_backend.finance.credit_scoring import rating_for
from moneygame_backend.shared import (
    CreditFactorKind,
    CreditRating,
    FactorImpact,
    LoanType,
)


@pytest.fixture
def engine(store: InMemoryFinanceStore, clock) -> CreditScoringEngine:
    return CreditScoringEngine(store, clock=clock)


def _factor(score, kind: CreditFactorKind):
    return next(factor for factor in score.factors if factor.kind is kind)


def test_player_without_debts_keeps_base_score(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile
) -> None:
    store.add_player(make_profile(salary=30_000))

    score = engine.calculate_credit_score(1)

    assert score.score == 750
    assert score.rating is CreditRating.EXCELLENT
    assert [factor.kind for factor in score.factors] == [
        CreditFactorKind.HISTORY_LENGTH,
        CreditFactorKind.CREDIT_MIX,
        CreditFactorKind.NEW_CREDIT,
    ]
    assert score.improvement_tips == (
        "Your credit score is in good standing; keep it at this level.",
    )


def test_unknown_player_gets_floor_score(engine: CreditScoringEngine) -> None:
    score = engine.calculate_credit_score(404)

    assert score.score == 300
    assert score.rating is CreditRating.POOR
    assert score.factors == ()
    assert score.improvement_tips == ("Player data could not be found.",)


def test_healthy_debt_improves_score(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=30_000))
    store.add_debt(make_debt(1, balance=100_000))

    score = engine.calculate_credit_score(1)

    # 750 + 10 (on time) + 2.22 (utilization 27.8%) + 10 (one loan type)
    assert score.score == 772
    assert _factor(score, CreditFactorKind.PAYMENT_HISTORY).weight == 35
    assert _factor(score, CreditFactorKind.UTILIZATION).impact is FactorImpact.POSITIVE
    history = _factor(score, CreditFactorKind.HISTORY_LENGTH)
    assert history.impact is FactorImpact.NEUTRAL
    assert history.description == "Insufficient data"


def test_overdue_debt_drags_score_down_and_adds_tips(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=30_000))
    store.add_debt(make_debt(1, balance=100_000, due_date=date(2025, 12, 1)))

    score = engine.calculate_credit_score(1)

    # 750 - 190 (nothing on time) + 2.22 + 10
    assert score.score == 572
    assert score.rating is CreditRating.FAIR
    assert _factor(score, CreditFactorKind.PAYMENT_HISTORY).impact is (
        FactorImpact.NEGATIVE
    )
    assert score.improvement_tips[0].startswith("Pay every installment on time")
    assert "Monitor your credit score regularly." in score.improvement_tips


def test_zero_income_with_debt_receives_maximum_utilization_penalty(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=0))
    store.add_debt(make_debt(1, balance=50_000, original=50_000))

    score = engine.calculate_credit_score(1)

    utilization = _factor(score, CreditFactorKind.UTILIZATION)
    assert utilization.adjustment == Decimal(-150)
    assert utilization.impact is FactorImpact.NEGATIVE
    assert score.score == 620
    assert "Keep outstanding debt below 30% of your annual income." in (
        score.improvement_tips
    )


def test_utilization_factor_is_skipped_once_everything_is_repaid(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=30_000))
    store.add_debt(make_debt(1, balance=0, original=20_000))

    score = engine.calculate_credit_score(1)

    kinds = {factor.kind for factor in score.factors}
    assert CreditFactorKind.UTILIZATION not in kinds
    assert CreditFactorKind.PAYMENT_HISTORY in kinds


def test_credit_mix_bonus_is_capped_at_three_types(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=100_000))
    old = datetime(2024, 1, 1, tzinfo=UTC)
    for debt_id, loan_type in enumerate(LoanType, start=1):
        store.add_debt(
            make_debt(
                debt_id,
                loan_type=loan_type,
                balance=0,
                original=1_000,
                created_at=old,
            )
        )

    score = engine.calculate_credit_score(1)

    mix = _factor(score, CreditFactorKind.CREDIT_MIX)
    assert mix.adjustment == Decimal(30)
    assert mix.impact is FactorImpact.POSITIVE


def test_many_recent_loans_trigger_new_credit_penalty(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=100_000))
    for debt_id in range(1, 4):
        store.add_debt(make_debt(debt_id, balance=1_000, payment="100.00"))

    score = engine.calculate_credit_score(1)

    new_credit = _factor(score, CreditFactorKind.NEW_CREDIT)
    assert new_credit.impact is FactorImpact.NEGATIVE
    assert new_credit.adjustment == Decimal(-20)
    assert "Avoid opening new loans for the next six months." in (
        score.improvement_tips
    )


def test_loans_older_than_the_window_do_not_count_as_new_credit(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=100_000))
    old = datetime(2025, 6, 1, tzinfo=UTC)
    for debt_id in range(1, 4):
        store.add_debt(
            make_debt(debt_id, balance=1_000, payment="100.00", created_at=old)
        )

    score = engine.calculate_credit_score(1)

    assert _factor(score, CreditFactorKind.NEW_CREDIT).impact is FactorImpact.POSITIVE


def test_score_stays_within_bounds_for_worst_case_profile(
    engine: CreditScoringEngine, store: InMemoryFinanceStore, make_profile, make_debt
) -> None:
    store.add_player(make_profile(salary=0))
    for debt_id in range(1, 5):
        store.add_debt(
            make_debt(debt_id, balance=90_000, due_date=date(2025, 10, 1))
        )

    score = engine.calculate_credit_score(1)

    assert 300 <= score.score <= 850
    assert score.rating is CreditRating.POOR
    assert len(score.improvement_tips) >= 2


@pytest.mark.parametrize(
    ("score", "rating"),
    [
        (850, CreditRating.EXCELLENT),
        (750, CreditRating.EXCELLENT),
        (749, CreditRating.GOOD),
        (650, CreditRating.GOOD),
        (649, CreditRating.FAIR),
        (550, CreditRating.FAIR),
        (549, CreditRating.POOR),
        (300, CreditRating.POOR),
    ],
)
def test_rating_thresholds(score: int, rating: CreditRating) -> None:
    assert rating_for(score) is rating


def test_storage_failure_degrades_to_floor_score(broken_uow, clock) -> None:
    engine = CreditScoringEngine(broken_uow, clock=clock)

    score = engine.calculate_credit_score(1)

    assert score.score == 300
    assert score.improvement_tips == (
        "An error occurred while calculating the credit score.",
    )
