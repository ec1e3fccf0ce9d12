"""Database package."""

from backend.db import base, session

__all__ = ["base", "session"]
