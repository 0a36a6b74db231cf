"""SQLite-backed fixtures for the SQL adapters."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from moneygame_backend.database import (
    AssetSchema,
    BaseSchema,
    CareerExpenseSchema,
    CareerSchema,
    DatabaseService,
    GoalSchema,
    PlayerAssetSchema,
    PlayerSessionSchema,
    SessionAssetStateSchema,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

SQL_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def sql_now() -> datetime:
    return SQL_NOW


@pytest.fixture
def database(tmp_path: Path) -> Iterator[DatabaseService]:
    service = DatabaseService(f"sqlite:///{tmp_path / 'moneygame.db'}")
    BaseSchema.metadata.create_all(service.engine)
    yield service
    service.dispose()


@pytest.fixture
def seeded_player(database: DatabaseService) -> int:
    """Create an engineer with two priced holdings and return the player id."""
    with database.session() as session:
        career = CareerSchema(name="Engineer", base_salary=Decimal(30_000))
        career.expenses = [
            CareerExpenseSchema(name="Rent", amount=Decimal(8_000)),
            CareerExpenseSchema(name="Food", amount=Decimal(4_000)),
        ]
        goal = GoalSchema(name="Buy a yacht")
        duplex = AssetSchema(name="Duplex", cost=Decimal(50_000), cash_flow=Decimal(1_500))
        kiosk = AssetSchema(name="Kiosk", cost=Decimal(10_000), cash_flow=Decimal(200))
        session.add_all([career, goal, duplex, kiosk])
        session.flush()

        player = PlayerSessionSchema(
            session_id=7,
            display_name="alice",
            career_id=career.id,
            goal_id=goal.id,
            cash=Decimal(50_000),
            savings=Decimal(5_000),
            salary=Decimal(30_000),
            passive_income=Decimal(2_000),
            created_at=SQL_NOW,
        )
        player.assets = [
            PlayerAssetSchema(asset_id=duplex.id, quantity=2),
            PlayerAssetSchema(asset_id=kiosk.id, quantity=1),
        ]
        session.add(player)
        session.add(
            SessionAssetStateSchema(
                session_id=7, asset_id=duplex.id, current_price=Decimal(60_000)
            )
        )
        session.flush()
        return player.id
