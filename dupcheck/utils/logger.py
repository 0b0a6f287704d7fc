"""
Module loggers for the duplicate checker.

Handlers are installed by setup_logging(); module loggers only carry the
configured level, so embedding applications see nothing until they
configure logging themselves.
"""

import logging
from dupcheck.config import get_settings

logging.getLogger("dupcheck").addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger at the configured LOG_LEVEL."""
    logger = logging.getLogger(name)

    if logger.level == logging.NOTSET:
        level = get_settings().LOG_LEVEL.upper()
        logger.setLevel(getattr(logging, level, logging.INFO))

    return logger
