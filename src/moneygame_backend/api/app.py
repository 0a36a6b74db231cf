"""Factory for constructing the FastAPI application."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moneygame_backend.api.routers import finance_router
from moneygame_backend.settings import get_settings
from moneygame_backend.shared import setup_logging


def create_api() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    config = get_settings()
    setup_logging(config.log_level, json_output=config.log_json)

    app = FastAPI(title="Money Game API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(finance_router)
    return app
