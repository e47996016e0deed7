"""
Logging setup for the auction server.

Modules log through logging.getLogger(__name__); setup_logging attaches one
console handler to the package loggers so they share a format.
"""

import logging

LOGGER_NAMES = ("games", "shared", "__main__")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO, stream=None) -> None:
    """
    Configure console logging for the auction packages.

    Args:
        level: Logging level
        stream: Stream for the handler (defaults to stderr)
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Remove existing handlers to avoid duplicates on repeated setup
        logger.handlers.clear()

        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("games").debug("Logging initialized at %s", logging.getLevelName(level))
