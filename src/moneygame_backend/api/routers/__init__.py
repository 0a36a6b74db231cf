"""Route definitions for public HTTP endpoints."""

from moneygame_backend.api.routers.finance import router as finance_router

__all__ = ["finance_router"]
