"""Database connectivity, schemas and SQL adapters for the finance engine."""

from moneygame_backend.database.base import BaseSchema
from moneygame_backend.database.dependencies import get_database
from moneygame_backend.database.repositories import (
    SqlDebtRepository,
    SqlFinanceUnitOfWork,
    SqlFinancialEventLog,
    SqlPlayerRepository,
)
from moneygame_backend.database.schemas import (
    AssetSchema,
    CareerExpenseSchema,
    CareerSchema,
    FinancialEventSchema,
    GoalSchema,
    PlayerAssetSchema,
    PlayerDebtSchema,
    PlayerSessionSchema,
    SessionAssetStateSchema,
)
from moneygame_backend.database.service import DatabaseService
from moneygame_backend.settings import BackendSettings, get_settings

__all__ = [
    "AssetSchema",
    "BackendSettings",
    "BaseSchema",
    "CareerExpenseSchema",
    "CareerSchema",
    "DatabaseService",
    "FinancialEventSchema",
    "GoalSchema",
    "PlayerAssetSchema",
    "PlayerDebtSchema",
    "PlayerSessionSchema",
    "SessionAssetStateSchema",
    "SqlDebtRepository",
    "SqlFinanceUnitOfWork",
    "SqlFinancialEventLog",
    "SqlPlayerRepository",
    "get_database",
    "get_settings",
]
