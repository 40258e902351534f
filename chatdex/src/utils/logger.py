"""
chatdex - Logging
==================
Logger factory shared by every chatdex module.

Level resolution (first match wins):
  1. The explicit ``level`` argument of ``get_logger``.
  2. ``settings.LOG_LEVEL`` (``CHATDEX_LOG_LEVEL``), e.g. ``INFO`` to keep
     the engine's per-query ``DEBUG`` lines out of a dev console.
  3. ``settings.ENV``: ``"dev"`` → DEBUG, ``"prod"`` → WARNING.

Engine components log under a short tag so that one conversation's
chunking, scoring and session activity can be told apart in a single
stream::

    2026-01-01 12:00:00 | DEBUG    | chatdex.src.core.scorer | [SCORER] 3 of 12 chunk(s) matched, returning 3.

Usage:
    from chatdex.src.utils.logger import get_logger
    logger = get_logger(__name__, tag="INDEXER")
    logger.info("Indexed %d chunks", count)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

from chatdex.config.settings import settings

_ENV_LEVEL_MAP = {
    "dev": logging.DEBUG,
    "prod": logging.WARNING,
}

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: int | None = None) -> int:
    """Return the effective level for a new logger."""
    if level is not None:
        return level
    if settings.LOG_LEVEL is not None:
        return logging.getLevelName(settings.LOG_LEVEL)
    return _ENV_LEVEL_MAP.get(settings.ENV, logging.INFO)


class TaggedLogger(logging.LoggerAdapter):
    """Prefixes every message with ``[TAG]``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['tag']}] {msg}", kwargs


def get_logger(name: str, level: int | None = None, tag: str | None = None) -> logging.Logger | TaggedLogger:
    """
    Create and return a named logger with a standardised formatter.

    Args:
        name:  Typically ``__name__`` of the calling module.
        level: Explicit logging level override.
        tag:   Optional component tag (``"CHUNKER"``, ``"SCORER"`` ...)
               prepended to every message.

    Returns:
        A configured ``logging.Logger``, wrapped in a ``TaggedLogger``
        when *tag* is given.
    """
    logger = logging.getLogger(name)

    # Handlers are attached once per logger name
    if not logger.handlers:
        resolved_level = resolve_level(level)
        logger.setLevel(resolved_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(resolved_level)
        console_handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(console_handler)

        logger.propagate = False

    if tag is None:
        return logger
    return TaggedLogger(logger, {"tag": tag})
