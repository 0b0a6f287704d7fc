"""
Logging setup for the command line entry points.
"""

import logging
import sys
from typing import List
from dupcheck.config import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# SDK and transport loggers are chatty at INFO
QUIET_LOGGERS = ("openai", "httpx", "httpcore")


def setup_logging() -> logging.Logger:
    """Send logs to stdout, and to LOG_FILE when set."""
    settings = get_settings()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger(__name__)
