"""Routers module - FastAPI route handlers"""

from . import config, diff, proofread

__all__ = ["config", "diff", "proofread"]
