"""Logging service API package."""

from logstore.api.routes import router

__all__ = ["router"]
