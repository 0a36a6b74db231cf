"""Builders and in-memory stores shared by the finance engine tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

import pytest

from moneygame_backend.finance import (
    AssetHolding,
    CareerProfile,
    DebtRecord,
    FinanceRepositories,
    InMemoryFinanceStore,
    InMemoryFinancialEventLog,
    PlayerAccount,
    PlayerProfile,
)
from moneygame_backend.shared import LoanType

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


def build_profile(
    player_id: int = 1,
    *,
    cash: str | int = 0,
    savings: str | int = 0,
    salary: str | int = 30_000,
    passive_income: str | int = 0,
    career: CareerProfile | None = None,
    assets: tuple[AssetHolding, ...] = (),
    goal_name: str | None = None,
) -> PlayerProfile:
    return PlayerProfile(
        player_id=player_id,
        session_id=10,
        display_name=f"player-{player_id}",
        account=PlayerAccount(
            cash=Decimal(cash),
            savings=Decimal(savings),
            salary=Decimal(salary),
            passive_income=Decimal(passive_income),
        ),
        career=career,
        goal_id=1 if goal_name else None,
        goal_name=goal_name,
        assets=assets,
    )


def build_debt(  # noqa: PLR0913
    debt_id: int,
    *,
    player_id: int = 1,
    loan_type: LoanType = LoanType.PERSONAL,
    balance: str | int = 100_000,
    original: str | int | None = None,
    rate: str = "12.0",
    payment: str = "2224.44",
    term_months: int = 60,
    due_date: date = date(2026, 2, 1),
    created_at: datetime = FIXED_NOW,
) -> DebtRecord:
    current = Decimal(balance)
    return DebtRecord(
        debt_id=debt_id,
        player_id=player_id,
        loan_type=loan_type,
        original_amount=Decimal(original if original is not None else balance),
        current_balance=current,
        interest_rate=Decimal(rate),
        monthly_payment=Decimal(payment),
        term_months=term_months,
        due_date=due_date,
        created_at=created_at,
        is_paid_off=current == 0,
    )


class _ExplodingPlayers:
    """Player store whose balance mutations fail after reads succeed."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner

    def get_profile(self, player_id: int) -> PlayerProfile | None:
        return self._inner.get_profile(player_id)

    def get_account(
        self, player_id: int, *, for_update: bool = False
    ) -> PlayerAccount | None:
        return self._inner.get_account(player_id, for_update=for_update)

    def adjust_balance(self, *args: Any, **kwargs: Any) -> Decimal:
        msg = "ledger offline"
        raise RuntimeError(msg)


class FailingBalanceUnitOfWork:
    """Wrap a store so every balance mutation raises inside the transaction."""

    def __init__(self, store: InMemoryFinanceStore) -> None:
        self._store = store

    @contextmanager
    def transaction(self) -> Iterator[FinanceRepositories]:
        with self._store.transaction() as repos:
            yield FinanceRepositories(
                players=_ExplodingPlayers(repos.players), debts=repos.debts
            )


class BrokenUnitOfWork:
    """Unit of work whose transactions cannot even be opened."""

    @contextmanager
    def transaction(self) -> Iterator[FinanceRepositories]:
        msg = "database unavailable"
        raise RuntimeError(msg)
        yield  # pragma: no cover


@pytest.fixture
def store() -> InMemoryFinanceStore:
    return InMemoryFinanceStore()


@pytest.fixture
def event_log() -> InMemoryFinancialEventLog:
    return InMemoryFinancialEventLog()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return fixed_clock


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_profile() -> Callable[..., PlayerProfile]:
    return build_profile


@pytest.fixture
def make_debt() -> Callable[..., DebtRecord]:
    return build_debt


@pytest.fixture
def read_debt(store: InMemoryFinanceStore) -> Callable[[int], DebtRecord | None]:
    def _read(debt_id: int) -> DebtRecord | None:
        with store.transaction() as repos:
            return repos.debts.get_debt(debt_id)

    return _read


@pytest.fixture
def read_account(
    store: InMemoryFinanceStore,
) -> Callable[[int], PlayerAccount | None]:
    def _read(player_id: int) -> PlayerAccount | None:
        with store.transaction() as repos:
            return repos.players.get_account(player_id)

    return _read


@pytest.fixture
def failing_balance_uow(store: InMemoryFinanceStore) -> FailingBalanceUnitOfWork:
    return FailingBalanceUnitOfWork(store)


@pytest.fixture
def broken_uow() -> BrokenUnitOfWork:
    return BrokenUnitOfWork()
