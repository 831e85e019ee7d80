"""
Queue-backed logging for the scanner.

Every `arbscan.*` logger propagates to one QueueHandler; a listener
thread does the console and file writes so the consumer loop never
blocks on I/O.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue

from arbscan.config.constants import (
    ALERT_COLOR,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    MAX_LOG_QUEUE_SIZE,
    RESET_COLOR,
)


ROOT_LOGGER = "arbscan"

# Third-party loggers capped at WARNING
QUIET_LOGGERS = ("aiohttp", "asyncio")

# Record attribute set by the alert sink
ALERT_ATTR = "alert"


class MicrosecondFormatter(logging.Formatter):
    """Appends microseconds to the formatted time."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created)
        return f"{created.strftime(datefmt or LOG_DATE_FORMAT)}.{created.microsecond:06d}"


class ColorConsoleFormatter(MicrosecondFormatter):
    """Highlights alert records in red. Used for terminals only."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if getattr(record, ALERT_ATTR, False):
            return f"{ALERT_COLOR}{text}{RESET_COLOR}"
        return text


def colors_supported(stream: object) -> bool:
    """Check whether ANSI colors can be written to `stream`."""
    isatty = getattr(stream, "isatty", None)
    return os.getenv("TERM") != "dumb" and callable(isatty) and bool(isatty())


class LogPipeline:
    """
    QueueHandler on the package logger plus a QueueListener.

    The console receives records at `level`; the optional log file
    receives everything down to DEBUG.
    """

    def __init__(
        self,
        level: int = logging.INFO,
        log_file: Path | None = None,
        logger_name: str = ROOT_LOGGER,
    ) -> None:
        """
        Initialize the pipeline; nothing is attached until start().

        Args:
            level: Console level.
            log_file: Optional DEBUG level file copy.
            logger_name: Logger the queue handler is attached to.
        """
        self._level = level
        self._log_file = log_file
        self._logger = logging.getLogger(logger_name)
        self._queue: Queue[logging.LogRecord] = Queue(maxsize=MAX_LOG_QUEUE_SIZE)
        self._handler: QueueHandler | None = None
        self._listener: QueueListener | None = None

    def _build_handlers(self) -> list[logging.Handler]:
        formatter = MicrosecondFormatter(LOG_FORMAT, LOG_DATE_FORMAT)

        console = logging.StreamHandler(sys.stdout)
        if colors_supported(sys.stdout):
            console.setFormatter(ColorConsoleFormatter(LOG_FORMAT, LOG_DATE_FORMAT))
        else:
            console.setFormatter(formatter)
        console.setLevel(self._level)
        handlers: list[logging.Handler] = [console]

        if self._log_file:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self._log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            handlers.append(file_handler)

        return handlers

    def start(self) -> None:
        """Attach the queue handler and start the listener thread."""
        if self._listener is not None:
            return

        self._handler = QueueHandler(self._queue)
        self._logger.addHandler(self._handler)
        self._logger.setLevel(logging.DEBUG if self._log_file else self._level)

        self._listener = QueueListener(
            self._queue,
            *self._build_handlers(),
            respect_handler_level=True,
        )
        self._listener.start()

    def stop(self) -> None:
        """Flush queued records and detach."""
        if self._listener is not None:
            self._listener.stop()
            self._listener = None

        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler = None

    @property
    def running(self) -> bool:
        return self._listener is not None

    @property
    def logger(self) -> logging.Logger:
        """Get the package logger."""
        return self._logger

    def __enter__(self) -> "LogPipeline":
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
) -> LogPipeline:
    """
    Route all scanner logging through a started LogPipeline.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path.

    Returns:
        The running pipeline; call stop() on exit.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    pipeline = LogPipeline(level=numeric_level, log_file=log_file)
    pipeline.start()

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return pipeline
