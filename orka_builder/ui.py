import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Ui(Protocol):
    """Message sink supplied by the host pipeline."""

    def say(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingUi:
    """
    Ui that writes progress to the log.

    :param prefix: Prepended to every message, e.g. the build name
    """
    def __init__(self, prefix=None):
        self.prefix = prefix

    def _format(self, message):
        return f"{self.prefix}: {message}" if self.prefix else message

    def say(self, message):
        logger.info(self._format(message))

    def error(self, message):
        logger.error(self._format(message))
