"""Logging for shelfdesk.

The TUI owns the terminal, so records go to a rotating ``shelfdesk.log`` in
the project root. Every module logs through ``get_logger(<component>)``.
"""

import os
from typing import Optional

from loguru import logger

from shelfdesk.utils import get_project_root

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"


def setup_logger(log_level: Optional[str] = None) -> None:
    """
    Replace all sinks with the shelfdesk log file.

    Args:
        log_level: DEBUG, INFO, WARNING, ... Falls back to SHELFDESK_LOG_LEVEL, then INFO.
    """
    if log_level is None:
        log_level = os.getenv("SHELFDESK_LOG_LEVEL", "INFO")

    logger.remove()
    logger.add(
        os.path.join(get_project_root(), "shelfdesk.log"),
        level=log_level.upper(),
        format=LOG_FORMAT,
        rotation="10 MB",
        retention="7 days",
        compression="zip",
        encoding="utf-8",
    )


def get_logger(name: Optional[str] = None):
    """Logger whose records carry ``name`` as the component."""
    return logger.bind(name=name or "shelfdesk")


# Records emitted through the bare loguru logger still need extra["name"]
logger.configure(extra={"name": "shelfdesk"})

setup_logger()
