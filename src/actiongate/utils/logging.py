"""
Logger helpers for actiongate.

All modules log under the "actiongate" namespace. Hosts that do not set up
logging themselves get the namespace level from settings when the
orchestrator is created.
"""

from __future__ import annotations

import logging
from typing import Optional

ROOT_LOGGER_NAME = "actiongate"


def configure_logging(level: Optional[str] = None) -> None:
    if level is None:
        from actiongate.core.settings import get_settings

        level = get_settings().runtime.log_level

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
