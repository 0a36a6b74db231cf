"""Dependency providers for FastAPI routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from moneygame_backend.database import (
    DatabaseService,
    SqlFinanceUnitOfWork,
    SqlFinancialEventLog,
    get_database,
)
from moneygame_backend.finance import FinanceService


def get_finance_service(
    database: Annotated[DatabaseService, Depends(get_database)],
) -> FinanceService:
    """Return a finance service backed by the SQL adapters."""
    return FinanceService(
        SqlFinanceUnitOfWork(database),
        event_log=SqlFinancialEventLog(database),
    )


FinanceServiceDep = Annotated[FinanceService, Depends(get_finance_service)]

__all__ = ["FinanceServiceDep", "get_finance_service"]
