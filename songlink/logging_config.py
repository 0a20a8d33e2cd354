"""
Logging configuration for the Songlink bot

Configures the songlink logger for the bot process.
"""

import logging
import sys

LOG_FORMAT = '[%(name)s] %(levelname)s: %(message)s'


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure logging for the bot process.

    Args:
        level: Log level name for the songlink logger (default: INFO)

    Returns:
        The configured "songlink" logger
    """
    logger = logging.getLogger("songlink")

    # Only configure if not already configured
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)
        logger.propagate = False

    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Keep discord.py quiet unless something is wrong
    logging.getLogger("discord").setLevel(logging.WARNING)

    return logger

