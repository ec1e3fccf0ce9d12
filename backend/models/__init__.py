"""SQLAlchemy models package."""

from backend.models import user

__all__ = ["user"]
