"""Interface through which the coordinator talks to the user."""

from typing import Protocol

from utilities.logger import Logger

# Set up logger
logger = Logger.get_logger(__name__)


class Notifier(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def confirm(self, message: str) -> bool: ...


class LoggingNotifier:
    """Writes messages to the log and accepts every confirmation."""

    def info(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)

    def confirm(self, message: str) -> bool:
        logger.info(f"{message} -> yes")
        return True
