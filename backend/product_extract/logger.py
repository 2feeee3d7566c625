"""
Logging configuration for product extraction.
"""

import logging
import sys

from backend.config import Config

# Create logger
logger = logging.getLogger('product_extract')
logger.setLevel(getattr(logging, str(Config.LOG_LEVEL).upper(), logging.INFO))

# Console handler with formatting
if not logger.handlers:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console.setFormatter(formatter)

    logger.addHandler(console)


# Fetcher-specific loggers
def get_fetcher_logger(name):
    """Get a child logger for a specific fetch strategy."""
    return logger.getChild(name)
