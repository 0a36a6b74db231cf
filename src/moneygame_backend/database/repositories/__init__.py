"""SQL adapters implementing the finance engine ports."""

from moneygame_backend.database.repositories.debt import SqlDebtRepository
from moneygame_backend.database.repositories.event import SqlFinancialEventLog
from moneygame_backend.database.repositories.player import SqlPlayerRepository
from moneygame_backend.database.repositories.unit_of_work import SqlFinanceUnitOfWork

__all__ = [
    "SqlDebtRepository",
    "SqlFinanceUnitOfWork",
    "SqlFinancialEventLog",
    "SqlPlayerRepository",
]
