"""
Status reporting

Observers that receive human-readable progress messages from the collector
"""

from loguru import logger


class StatusReporter:
    """Receives progress messages; subclasses decide where they go"""

    def report(self, message: str) -> None:
        raise NotImplementedError

    def report_error(self, message: str) -> None:
        self.report(message)


class NullStatusReporter(StatusReporter):
    """Discards all messages"""

    def report(self, message: str) -> None:
        pass


class LoggingStatusReporter(StatusReporter):
    """Writes messages to the log"""

    def report(self, message: str) -> None:
        logger.info(message)

    def report_error(self, message: str) -> None:
        logger.error(message)

