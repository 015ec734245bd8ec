"""Logging setup shared by the API process."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``careerpath`` logger hierarchy once.

    Args:
        level: log level name (DEBUG, INFO, WARNING, ERROR)
    """
    logger = logging.getLogger("careerpath")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # avoid duplicate handlers on reload
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
