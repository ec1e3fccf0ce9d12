"""Logging setup for the API process."""

from __future__ import annotations

import logging

from backend.core.config import settings


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL."""
    level = (settings.LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
