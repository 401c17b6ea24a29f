"""Logging setup for gz_docs commands."""

from __future__ import annotations

import logging

_LOGGER_NAME = "gz_docs"


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Configure the gz_docs logger hierarchy with a single console handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[gzdocs] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging"]
