"""Routers module - FastAPI route handlers"""

from . import config, diff, formatting

__all__ = ["config", "diff", "formatting"]
