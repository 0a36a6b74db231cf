"""SQLAlchemy schemas backing the finance engine."""

from moneygame_backend.database.schemas.asset import (
    AssetSchema,
    PlayerAssetSchema,
    SessionAssetStateSchema,
)
from moneygame_backend.database.schemas.debt import PlayerDebtSchema
from moneygame_backend.database.schemas.event import FinancialEventSchema
from moneygame_backend.database.schemas.player import (
    CareerExpenseSchema,
    CareerSchema,
    GoalSchema,
    PlayerSessionSchema,
)

__all__ = [
    "AssetSchema",
    "CareerExpenseSchema",
    "CareerSchema",
    "FinancialEventSchema",
    "GoalSchema",
    "PlayerAssetSchema",
    "PlayerDebtSchema",
    "PlayerSessionSchema",
    "SessionAssetStateSchema",
]
