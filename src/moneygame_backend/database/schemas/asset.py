"""Asset catalog and holdings database schemas."""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moneygame_backend.database.base import MONEY, BaseSchema


class AssetSchema(BaseSchema):
    """Catalog entry for an asset that players can own."""

    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    cost: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    cash_flow: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)


class PlayerAssetSchema(BaseSchema):
    """Quantity of a catalog asset held by a player."""

    __tablename__ = "player_assets"
    __table_args__ = (UniqueConstraint("player_id", "asset_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_id: Mapped[int] = mapped_column(
        ForeignKey("player_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    asset_id: Mapped[int] = mapped_column(ForeignKey("assets.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    asset: Mapped[AssetSchema] = relationship()


class SessionAssetStateSchema(BaseSchema):
    """Market price of an asset within one game session."""

    __tablename__ = "session_asset_states"
    __table_args__ = (UniqueConstraint("session_id", "asset_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    asset_id: Mapped[int] = mapped_column(ForeignKey("assets.id"), nullable=False)
    current_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
