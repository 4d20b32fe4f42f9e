"""Logging utilities.

All core loggers live under the ``flashgen_core`` namespace and share one
stdout handler installed on the package logger, so applications can re-route
or silence the core with a single ``logging.getLogger("flashgen_core")`` call.
"""

import logging
import os
import sys

PACKAGE_LOGGER = "flashgen_core"

_LOG_LEVEL = os.environ.get("FLASHGEN_LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
    return root


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Get a logger under the package namespace.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Logger propagating to the package handler
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask all but the last few characters of a credential for log output."""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
