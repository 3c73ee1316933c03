"""Logging configuration for the CloudMarc calculators and CV converter."""

import logging
import sys
from typing import Optional

from cm_calculators.config import LOG_LEVEL

_DEFAULT_LEVEL = LOG_LEVEL.upper()


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance writing to stdout."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, _DEFAULT_LEVEL, logging.INFO))
    if level is not None:
        logger.setLevel(level)
    return logger
