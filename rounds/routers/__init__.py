"""Aggregate router exports."""
from .notifications import router as notifications_router

__all__ = ["notifications_router"]
