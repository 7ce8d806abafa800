"""Logging configuration for hosts and scripts."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging; level defaults to the YARD_LOG_LEVEL setting."""
    if level is None:
        from .config import get_settings

        level = get_settings().log_level
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
