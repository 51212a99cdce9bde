"""Process-wide logging setup driven by the app settings."""

from __future__ import annotations

import logging

from nysc_extract.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; later calls are no-ops."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
    _LOGGING_CONFIGURED = True
