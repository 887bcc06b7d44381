"""
Structured Logging

JSON or plain-text logging with context propagation.

Design decisions:
- Structured records, rendered per handler
- Log level filtering
- Context enrichment through contextvars
- One shared logger per name so configure_logging() reaches every module
"""

import contextvars
import json
import sys
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def parse(cls, value: "str | int | LogLevel") -> "LogLevel":
        """Accept a level name ("info") or number (20)."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}")
        return cls(value)


@dataclass
class LogRecord:
    """A structured log record."""

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    logger_name: str = "taskplanner"

    # Structured data
    data: dict[str, Any] = field(default_factory=dict)

    # Error info
    error: str | None = None
    error_type: str | None = None
    stack_trace: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result = {
            "timestamp": self.timestamp.isoformat(),
            "level": LogLevel(self.level).name,
            "logger": self.logger_name,
            "message": self.message,
        }

        if self.data:
            result["data"] = self.data

        if self.error:
            result["error"] = {
                "message": self.error,
                "type": self.error_type,
                "stack_trace": self.stack_trace,
            }

        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def to_text(self) -> str:
        """Human-readable single line."""
        output = (
            f"[{self.timestamp.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{LogLevel(self.level).name:8s} {self.logger_name}: {self.message}"
        )
        if self.data:
            output += f" | {self.data}"
        if self.error:
            output += f" | ERROR: {self.error}"
        return output


class LogHandler:
    """Base class for log handlers."""

    def __init__(self, level: LogLevel = LogLevel.DEBUG):
        self.level = level

    def should_handle(self, level: LogLevel) -> bool:
        return level >= self.level

    def handle(self, record: LogRecord) -> None:
        pass


class ConsoleHandler(LogHandler):
    """Writes logs to stderr so stdout stays reserved for command output."""

    def __init__(
        self,
        level: LogLevel = LogLevel.DEBUG,
        stream: TextIO | None = None,
        json_output: bool = False,
    ):
        super().__init__(level)
        self._stream = stream
        self.json_output = json_output

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected/captured stderr is honoured
        return self._stream or sys.stderr

    def handle(self, record: LogRecord) -> None:
        if not self.should_handle(record.level):
            return

        output = record.to_json() if self.json_output else record.to_text()
        print(output, file=self.stream)


class BufferHandler(LogHandler):
    """Buffers logs in memory for testing."""

    def __init__(self, level: LogLevel = LogLevel.DEBUG, max_records: int = 1000):
        super().__init__(level)
        self.records: list[LogRecord] = []
        self._max_records = max_records

    def handle(self, record: LogRecord) -> None:
        if not self.should_handle(record.level):
            return

        self.records.append(record)

        if len(self.records) > self._max_records:
            self.records = self.records[-self._max_records :]

    def messages(self, level: LogLevel | None = None) -> list[str]:
        return [r.message for r in self.records if level is None or r.level == level]

    def clear(self) -> None:
        self.records.clear()


# Context variables for log enrichment
_log_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "log_context", default={}
)


class StructuredLogger:
    """
    Main structured logging interface.

    Context set through ``context()`` is merged into every record's data.
    """

    def __init__(
        self,
        name: str = "taskplanner",
        level: LogLevel = LogLevel.WARNING,
        handlers: list[LogHandler] | None = None,
    ):
        self.name = name
        self.level = level
        self.handlers = handlers if handlers is not None else [ConsoleHandler()]

    def _log(
        self,
        level: LogLevel,
        message: str,
        data: dict[str, Any] | None = None,
        error: Exception | None = None,
        **extra: Any,
    ) -> None:
        if level < self.level:
            return

        record = LogRecord(
            level=level,
            message=message,
            logger_name=self.name,
            data={**_log_context.get(), **(data or {}), **extra},
        )

        if error:
            record.error = str(error)
            record.error_type = type(error).__name__
            if isinstance(error, BaseException) and error.__traceback__ is not None:
                record.stack_trace = "".join(
                    traceback.format_exception(type(error), error, error.__traceback__)
                )

        for handler in self.handlers:
            try:
                handler.handle(record)
            except Exception:
                pass  # Don't let logging errors affect main flow

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, error: Exception | None = None, **kwargs: Any) -> None:
        self._log(LogLevel.ERROR, message, error=error, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log the exception currently being handled at ERROR level."""
        self.error(message, error=sys.exc_info()[1], **kwargs)

    @staticmethod
    @contextmanager
    def context(**kwargs: Any):
        """
        Context manager for adding fields to every log record.

        Usage:
            with logger.context(strategy="llm"):
                logger.info("Requesting breakdown")
        """
        token = _log_context.set({**_log_context.get(), **kwargs})
        try:
            yield
        finally:
            _log_context.reset(token)


_loggers: dict[str, StructuredLogger] = {}
_defaults: dict[str, Any] = {"level": LogLevel.WARNING, "json_output": False, "handlers": None}


def get_logger(name: str = "taskplanner") -> StructuredLogger:
    """Get the shared logger for ``name``, creating it on first use."""
    logger = _loggers.get(name)
    if logger is None:
        logger = StructuredLogger(name=name, level=_defaults["level"], handlers=_default_handlers())
        _loggers[name] = logger
    return logger


def configure_logging(
    level: LogLevel | str = LogLevel.WARNING,
    json_output: bool = False,
    handlers: list[LogHandler] | None = None,
) -> None:
    """
    Apply level and output format to every logger, existing and future.

    ``handlers`` replaces the console handler; tests pass a BufferHandler.
    """
    level = LogLevel.parse(level)
    _defaults["level"] = level
    _defaults["json_output"] = json_output
    _defaults["handlers"] = handlers

    for logger in _loggers.values():
        logger.level = level
        logger.handlers = _default_handlers()


def _default_handlers() -> list[LogHandler]:
    if _defaults["handlers"] is not None:
        return list(_defaults["handlers"])
    return [ConsoleHandler(json_output=_defaults["json_output"])]
