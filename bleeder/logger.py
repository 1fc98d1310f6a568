"""Shared logger for the bleeder package."""

import logging

LOGGER_NAME = "bleeder"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Safe to call more than once; only the level changes on later calls.
    """
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
