"""Logging setup shared by the CLI and the converter."""

from __future__ import annotations

import logging
import sys

from .config.helpers import VERBOSITY_LEVELS, _resolve_verbosity

LOGGER_NAME = "confluence_md"
LOG_FORMAT = "%(levelname)s %(message)s"
HANDLER_NAME = "confluence_md.stderr"


def configure_logging(verbosity: str = "info") -> logging.Logger:
    """Attach a stream handler to the package logger at ``verbosity``.

    Parameters
    ----------
    verbosity : str
        One of ``debug``, ``info``, ``warning`` or ``error``.

    Returns
    -------
    logging.Logger
        The configured ``confluence_md`` logger.

    Raises
    ------
    ConverterConfigError
        If ``verbosity`` is not a known level.
    """
    level = VERBOSITY_LEVELS[_resolve_verbosity(verbosity)]
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.set_name(HANDLER_NAME)
    logger.addHandler(handler)
    return logger


__all__ = ["HANDLER_NAME", "LOGGER_NAME", "configure_logging"]
