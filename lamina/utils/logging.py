"""\
Logging
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides logging utilities and configuration helpers for
this package. The error engine reports what it does, like rejected
argument lists or entries flagged as foreign, as events from the
`lamina.core.events` catalogue.

As a library, the package only ever attaches a `NullHandler` to its
own logger. Applications wanting to see the engine events either
configure logging themselves or call `configure` with a logger
configuration.
"""

from __future__ import annotations

import json
import logging
import sys
import typing as t

from lamina.core.events import EVENTS
from lamina.core.events import EventSeverity

if t.TYPE_CHECKING:
    from lamina.core.config import LoggerConfig

__all__: list[str] = [
    "ColouredFormatter",
    "JSONFormatter",
    "LaminaFormatter",
    "configure",
    "emit",
    "get_logger",
]

_ROOT_LOGGER: t.Final[str] = "lamina"

_SEVERITY_LEVEL_MAP: dict[EventSeverity, int] = {
    EventSeverity.DEBUG: logging.DEBUG,
    EventSeverity.INFO: logging.INFO,
    EventSeverity.WARNING: logging.WARNING,
    EventSeverity.ERROR: logging.ERROR,
    EventSeverity.CRITICAL: logging.CRITICAL,
}

logging.getLogger(_ROOT_LOGGER).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records in JSON format, capturing the
    standard fields of the record along with any extra fields attached
    to it, such as the event name and its diagnostics.

    :param extras: Whether to include extra fields in output, defaults
        to `True`.
    """

    def __init__(self, extras: bool = True):
        """Initialise the JSON formatter instance."""
        super().__init__()
        self.extras = extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        :param record: The log record to format.
        :return: JSON-formatted log message.
        """
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if (
                    key not in payload
                    and key not in LaminaFormatter.LOG_RECORD_ATTRS
                    and not key.startswith("_")
                ):
                    payload[key] = value
        return json.dumps(payload, default=str)


class LaminaFormatter(logging.Formatter):
    """Custom formatter that automatically includes extra fields.

    The formatter detects extra fields (those not part of the standard
    `LogRecord` attributes) and makes them available as `%(extra)s` in
    the format string, so engine events show their diagnostics without
    any manual string construction.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps, defaults to
        `None`.
    :param extra_format: Format string for individual extra fields,
        defaults to `key: value`.
    :param extra_separator: Separator between multiple extra fields,
        defaults to a single space.
    :var LOG_RECORD_ATTRS: Set of standard `LogRecord` attributes.
    """

    LOG_RECORD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "taskName",
        "qualName",
        "extra",
    }

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        extra_format: str = "{key}: {value}",
        extra_separator: str = " ",
    ) -> None:
        """Initialise the custom formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling.

        :param record: The log record to format.
        :return: Formatted log message with extra fields.
        """
        clone = logging.makeLogRecord(record.__dict__)
        entries = [
            self.extra.format(key=key, value=value)
            for key, value in sorted(record.__dict__.items())
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_")
        ]
        clone.extra = self.extra_separator.join(entries)
        if not hasattr(clone, "qualName"):
            clone.qualName = f"{record.name}.{record.funcName}"
        return super().format(clone)


class ColouredFormatter(LaminaFormatter):
    """Formatter colouring the level and qualified name for a TTY.

    :var COLORS: Dictionary mapping log levels to ANSI colour codes.
    """

    COLORS = {
        "DEBUG": "\x1b[38;5;14m",
        "INFO": "\x1b[38;5;41m",
        "WARNING": "\x1b[38;5;215m",
        "ERROR": "\x1b[38;5;204m",
        "CRITICAL": "\x1b[38;5;197m",
        "QUALNAME": "\x1b[38;5;140m",
        "RESET": "\x1b[0m",
    }

    is_tty: bool = False

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, with colours only for TTY output.

        :param record: The log record to format.
        :return: Formatted log message.
        """
        clone = logging.makeLogRecord(record.__dict__)
        qualname = f"{record.name}.{record.funcName}"
        if self.is_tty:
            colour = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            clone.levelname = (
                f"{colour}{record.levelname:>8s}{self.COLORS['RESET']}"
            )
            clone.qualName = (
                f"{self.COLORS['QUALNAME']}{qualname}{self.COLORS['RESET']}"
            )
        else:
            clone.levelname = f"{record.levelname:>8s}"
            clone.qualName = qualname
        return super().format(clone)


def configure(config: LoggerConfig) -> logging.Logger:
    """Configure the package logger based on provided settings.

    Previously configured handlers of the package logger are replaced,
    the root logger is never touched.

    :param config: Logger configuration settings.
    :return: The configured package logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(getattr(logging, config.level.upper()))
    if not config.tty.enable:
        logger.addHandler(logging.NullHandler())
        return logger
    logger.setLevel(
        min(
            getattr(logging, config.level.upper()),
            getattr(logging, config.tty.level.upper()),
        )
    )
    tty = logging.StreamHandler(sys.stdout)
    tty.setLevel(getattr(logging, config.tty.level.upper()))
    if config.as_json:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ColouredFormatter(
            fmt=config.tty.fmt,
            datefmt=config.tty.datefmt,
            extra_format="[{key}: {value}]",
            extra_separator=" ",
        )
        formatter.is_tty = config.tty.colour and sys.stdout.isatty()
    tty.setFormatter(formatter)
    logger.addHandler(tty)
    return logger


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    :param logger_name: Logger name.
    :return: Logger instance.
    """
    return logging.getLogger(logger_name)


def emit(logger: logging.Logger, event: str, **fields: t.Any) -> None:
    """Log an event from the catalogue at its declared severity.

    :param logger: Logger to emit the event with.
    :param event: Name of the event in `lamina.core.events.EVENTS`.
    :param fields: Extra fields attached to the log record.
    :raises KeyError: If the event is not part of the catalogue.
    """
    details = EVENTS[event]
    level = _SEVERITY_LEVEL_MAP[details["severity"]]
    if logger.isEnabledFor(level):
        logger.log(
            level, details["description"], extra={"event": event, **fields}
        )
