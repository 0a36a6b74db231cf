"""Transactional scope binding the SQL adapters to one session."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from moneygame_backend.database.repositories.debt import SqlDebtRepository
from moneygame_backend.database.repositories.player import SqlPlayerRepository
from moneygame_backend.database.service import DatabaseService  # noqa: TC001
from moneygame_backend.finance import FinanceRepositories


class SqlFinanceUnitOfWork:
    """Open one SQLAlchemy session per finance transaction."""

    def __init__(self, database: DatabaseService) -> None:
        self._database = database

    @contextmanager
    def transaction(self) -> Iterator[FinanceRepositories]:
        """Commit on success; roll back every write on error."""
        with self._database.session() as session:
            yield FinanceRepositories(
                players=SqlPlayerRepository(session),
                debts=SqlDebtRepository(session),
            )


__all__ = ["SqlFinanceUnitOfWork"]
