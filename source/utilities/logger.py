"""Provides a class for creating and configuring loggers."""

import os
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Logger:
    """
    Class for creating named loggers with standardized configuration.
    """

    @staticmethod
    def get_logger(name: str, level=None) -> logging.Logger:
        """Creates and returns a logger with the given name and logging level.

        When no level is given, LOG_LEVEL from the environment is used.
        """
        if level is None:
            level = os.getenv("LOG_LEVEL", "INFO").upper()

        logger = logging.getLogger(name)
        logger.setLevel(level)

        if not logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(console_handler)

        return logger
