"""Logger setup and forwarding of a simulated script's console output."""

from __future__ import annotations

import logging
from typing import Optional, Union

PACKAGE_LOGGER = "functions_sim"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_logger(level: Union[int, str] = logging.WARNING, name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return the named logger with a stream handler attached once."""
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def log_captured_output(logger: logging.Logger, captured: Optional[str]) -> None:
    """Replay what the script printed while it ran, one DEBUG record per line."""
    if not captured:
        return
    for line in captured.splitlines():
        if line.strip():
            logger.debug("script> %s", line)
