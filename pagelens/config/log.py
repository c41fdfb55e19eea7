"""Logging setup shared by the CLI and the API."""
from __future__ import annotations

import logging

from pagelens.config.settings import settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once, using the level from settings by default."""
    logging.basicConfig(
        level=(level or settings.log.level).upper(),
        format=settings.log.format,
    )
