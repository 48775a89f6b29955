"""Logging configuration for urlpresser."""

import logging
import sys


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Setup logging configuration.

    Installs a stdout handler on the "urlpresser" logger; module loggers
    (urlpresser.*) propagate to it.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("urlpresser")
    logger.setLevel(numeric_level)

    # Remove existing handlers so repeated calls do not duplicate output
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
