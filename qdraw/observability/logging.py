"""Centralised logging helpers for Qdraw."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "qdraw") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: Union[int, str] = logging.WARNING, *, stream: Optional[object] = None) -> logging.Logger:
    """Attach a stream handler to the ``qdraw`` logger (idempotent)."""

    logger = get_logger("qdraw")
    logger.setLevel(level)
    if not any(getattr(handler, "_qdraw_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._qdraw_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
