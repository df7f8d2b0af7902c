"""API routes."""

from watchcompass.api.router import api_router

__all__ = ["api_router"]
