"""HTTP transport for the finance engine."""

from moneygame_backend.api.app import create_api

__all__ = ["create_api"]
