"""Collaborator contracts used by the finance engine.

The engine never talks to a database directly. It reads player and debt data
through these protocols and performs every read-then-write sequence inside a
single :meth:`FinanceUnitOfWork.transaction` scope, so that a debt update and
the matching account mutation either both commit or both disappear. The
database layer provides SQLAlchemy adapters; the in-memory adapters below back
tests and local tooling.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from decimal import Decimal  # noqa: TC003
from typing import Protocol

from moneygame_backend.finance.errors import (
    DebtNotFoundError,
    InsufficientFundsError,
    PlayerNotFoundError,
)
from moneygame_backend.finance.models import (
    DebtRecord,
    NewDebt,
    PlayerAccount,
    PlayerProfile,
)
from moneygame_backend.shared.enums import AccountKind
from moneygame_backend.shared.events import FinancialEvent  # noqa: TC001
from moneygame_backend.shared.value_objects import quantize_money

logger = logging.getLogger(__name__)


class PlayerStore(Protocol):
    """Protocol describing how player session data is read and mutated."""

    def get_profile(self, player_id: int) -> PlayerProfile | None:
        """Return the full read model for *player_id* or ``None``."""

    def get_account(
        self, player_id: int, *, for_update: bool = False
    ) -> PlayerAccount | None:
        """Return the account balances, optionally locking them for update."""

    def adjust_balance(
        self, player_id: int, account: AccountKind, delta: Decimal
    ) -> Decimal:
        """Increment (or decrement) *account* by *delta* and return the new balance."""


class DebtStore(Protocol):
    """Protocol describing how debt records are read and mutated."""

    def list_debts(
        self, player_id: int, *, active_only: bool = False
    ) -> list[DebtRecord]:
        """Return debts for *player_id* ordered by due date ascending."""

    def get_debt(self, debt_id: int, *, for_update: bool = False) -> DebtRecord | None:
        """Return the debt identified by *debt_id* or ``None``."""

    def create_debt(self, debt: NewDebt) -> DebtRecord:
        """Persist a newly originated debt and return it with its identifier."""

    def save_debt(self, debt: DebtRecord) -> DebtRecord:
        """Persist the mutable fields of *debt* and return the stored record."""


@dataclass(slots=True, frozen=True)
class FinanceRepositories:
    """Stores bound to a single open transaction."""

    players: PlayerStore
    debts: DebtStore


class FinanceUnitOfWork(Protocol):
    """Protocol for opening atomic units of work against the stores."""

    def transaction(self) -> AbstractContextManager[FinanceRepositories]:
        """Open a transaction that commits on success and rolls back on error."""


class FinancialEventLog(Protocol):
    """Append-only credit history."""

    def append(self, event: FinancialEvent) -> None:
        """Record *event* after the originating transaction committed."""

    def fetch(self, player_id: int) -> tuple[FinancialEvent, ...]:
        """Return the events recorded for *player_id* in insertion order."""


class NullFinancialEventLog:
    """Event log that discards every event."""

    def append(self, event: FinancialEvent) -> None:
        """Ignore *event*."""

    def fetch(self, player_id: int) -> tuple[FinancialEvent, ...]:
        """Return an empty history."""
        return ()


class InMemoryFinancialEventLog:
    """Trivial in-memory implementation of :class:`FinancialEventLog`."""

    def __init__(self) -> None:
        self._events: dict[int, list[FinancialEvent]] = {}

    def append(self, event: FinancialEvent) -> None:
        """Append *event* to the history of its player."""
        self._events.setdefault(event.player_id, []).append(event)

    def fetch(self, player_id: int) -> tuple[FinancialEvent, ...]:
        """Return all events stored for *player_id*."""
        return tuple(self._events.get(player_id, ()))


def append_event(event_log: FinancialEventLog, event: FinancialEvent) -> None:
    """Append *event* after commit; a failing log never undoes the committed work."""
    try:
        event_log.append(event)
    except Exception:
        logger.exception(
            "Failed to record financial event",
            extra={"player_id": event.player_id, "event_type": str(event.event_type)},
        )


def _debt_order(debt: DebtRecord) -> tuple:
    return (debt.due_date, debt.debt_id)


class InMemoryFinanceStore:
    """In-memory implementation of :class:`FinanceUnitOfWork`.

    Transactions are serialized by a re-entrant lock. Stored models are
    immutable, so a shallow copy of both tables is enough to roll back.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._players: dict[int, PlayerProfile] = {}
        self._debts: dict[int, DebtRecord] = {}
        self._next_debt_id = 1

    def add_player(self, profile: PlayerProfile) -> PlayerProfile:
        """Register *profile*, replacing any player with the same identifier."""
        with self._lock:
            self._players[profile.player_id] = profile
        return profile

    def add_debt(self, debt: DebtRecord) -> DebtRecord:
        """Store an existing debt record as-is (used for seeding history)."""
        with self._lock:
            self._debts[debt.debt_id] = debt
            self._next_debt_id = max(self._next_debt_id, debt.debt_id + 1)
        return debt

    @contextmanager
    def transaction(self) -> Iterator[FinanceRepositories]:
        """Provide a serialized transactional scope over the stored tables."""
        with self._lock:
            players = dict(self._players)
            debts = dict(self._debts)
            next_debt_id = self._next_debt_id
            try:
                yield FinanceRepositories(
                    players=_InMemoryPlayerRepository(self),
                    debts=_InMemoryDebtRepository(self),
                )
            except Exception:
                self._players = players
                self._debts = debts
                self._next_debt_id = next_debt_id
                raise


class _InMemoryPlayerRepository:
    def __init__(self, store: InMemoryFinanceStore) -> None:
        self._store = store

    def get_profile(self, player_id: int) -> PlayerProfile | None:
        return self._store._players.get(player_id)

    def get_account(
        self, player_id: int, *, for_update: bool = False
    ) -> PlayerAccount | None:
        profile = self._store._players.get(player_id)
        return profile.account if profile is not None else None

    def adjust_balance(
        self, player_id: int, account: AccountKind, delta: Decimal
    ) -> Decimal:
        profile = self._store._players.get(player_id)
        if profile is None:
            raise PlayerNotFoundError(player_id)
        new_balance = quantize_money(profile.account.balance_of(account) + delta)
        if new_balance < 0:
            msg = f"Account {account} of player {player_id} would become negative."
            raise InsufficientFundsError(msg)
        updated_account = profile.account.model_copy(
            update={account.value: new_balance}
        )
        self._store._players[player_id] = profile.model_copy(
            update={"account": updated_account}
        )
        return new_balance


class _InMemoryDebtRepository:
    def __init__(self, store: InMemoryFinanceStore) -> None:
        self._store = store

    def list_debts(
        self, player_id: int, *, active_only: bool = False
    ) -> list[DebtRecord]:
        debts = [
            debt
            for debt in self._store._debts.values()
            if debt.player_id == player_id and not (active_only and debt.is_paid_off)
        ]
        return sorted(debts, key=_debt_order)

    def get_debt(self, debt_id: int, *, for_update: bool = False) -> DebtRecord | None:
        return self._store._debts.get(debt_id)

    def create_debt(self, debt: NewDebt) -> DebtRecord:
        debt_id = self._store._next_debt_id
        self._store._next_debt_id += 1
        record = DebtRecord(
            debt_id=debt_id,
            player_id=debt.player_id,
            loan_type=debt.loan_type,
            original_amount=debt.original_amount,
            current_balance=debt.original_amount,
            interest_rate=debt.interest_rate,
            monthly_payment=debt.monthly_payment,
            term_months=debt.term_months,
            due_date=debt.due_date,
            created_at=debt.created_at,
            description=debt.description,
            collateral_asset_id=debt.collateral_asset_id,
        )
        self._store._debts[debt_id] = record
        return record

    def save_debt(self, debt: DebtRecord) -> DebtRecord:
        if debt.debt_id not in self._store._debts:
            raise DebtNotFoundError(debt.debt_id)
        self._store._debts[debt.debt_id] = debt
        return debt


__all__ = [
    "DebtStore",
    "FinanceRepositories",
    "FinanceUnitOfWork",
    "FinancialEventLog",
    "InMemoryFinanceStore",
    "InMemoryFinancialEventLog",
    "NullFinancialEventLog",
    "PlayerStore",
    "append_event",
]
