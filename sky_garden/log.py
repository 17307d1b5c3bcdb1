"""Logging setup for the command line."""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

LOG_LEVEL_ENV = "SKY_GARDEN_LOG_LEVEL"


def default_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()


def configure_logging(level: str | int | None = None) -> None:
    """Route all records through a single rich handler on the root logger."""
    logger = logging.getLogger()
    logger.setLevel(level if level is not None else default_level())
    handler = RichHandler(markup=False, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.handlers.clear()
    logger.addHandler(handler)
