"""Structured logging configuration for termfx.

Provides logging setup with correlation IDs, optional JSON file output
and configurable log levels.
"""

from __future__ import annotations

import json
import logging
import logging.config
import time
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from termfx.exceptions import TermFXError
from termfx.utils.rich_logging import FileFormatter, create_rich_handler

if TYPE_CHECKING:  # pragma: no cover
    from termfx.models import ObservabilityConfig

correlation_id: ContextVar[str | None] = cast(
    "ContextVar[str | None]",
    ContextVar("correlation_id", default=None),
)

_EXCLUDED_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "correlation_id",
    }
)


class CorrelationFilter(logging.Filter):
    """Filter to add correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation ID to log record."""
        record.correlation_id = correlation_id.get() or "no-correlation-id"
        return True


class StructuredFormatter(logging.Formatter):
    """Structured JSON formatter for logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "correlation_id"):
            log_entry["correlation_id"] = record.correlation_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        log_entry.update(
            {
                key: value
                for key, value in record.__dict__.items()
                if key not in _EXCLUDED_KEYS
            }
        )

        return json.dumps(log_entry, default=str)


def setup_logging(config: ObservabilityConfig) -> None:
    """Set up logging for the ``termfx`` logger tree.

    Console records go through a RichHandler on stderr; a rotating file
    handler is added when ``config.log_file`` is set.
    """
    level = config.log_level.value

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": StructuredFormatter,
            },
            "simple": {
                "()": FileFormatter,
                "format": "%(asctime)s %(levelname)s %(name)s.%(funcName)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "filters": {
            "correlation": {
                "()": CorrelationFilter,
            },
        },
        "handlers": {},
        "loggers": {
            "termfx": {
                "level": level,
                "handlers": [],
                "propagate": False,
            },
        },
    }

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        logging_config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "structured" if config.structured_logging else "simple",
            "filters": ["correlation"],
            "filename": config.log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "encoding": "utf-8",
        }
        logging_config["loggers"]["termfx"]["handlers"].append("file")

    logging.config.dictConfig(logging_config)

    rich_handler = create_rich_handler(level=level)
    rich_handler.addFilter(CorrelationFilter())
    logging.getLogger("termfx").addHandler(rich_handler)

    if config.log_correlation_id:
        set_correlation_id()


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``termfx`` namespace."""
    if name == "termfx" or name.startswith("termfx."):
        return logging.getLogger(name)
    return logging.getLogger(f"termfx.{name}")


def set_correlation_id(corr_id: str | None = None) -> str:
    """Set correlation ID for the current context."""
    if corr_id is None:
        corr_id = str(uuid.uuid4())
    correlation_id.set(corr_id)
    return corr_id


class LoggingContext:
    """Context manager that logs the start, end and duration of an operation."""

    def __init__(
        self,
        operation: str,
        logger: logging.Logger | None = None,
        log_level: int = logging.DEBUG,
        **kwargs: Any,
    ):
        """Initialize operation context manager.

        Args:
            operation: Name of the operation
            logger: Logger to use (defaults to this module's logger)
            log_level: Level for the start and completion records
            **kwargs: Additional context included as record extras
        """
        self.operation = operation
        self.kwargs = kwargs
        self.logger = logger or get_logger(__name__)
        self.log_level = log_level
        self.start_time: float | None = None
        self.duration = 0.0

    def __enter__(self) -> LoggingContext:
        """Enter the context manager."""
        self.start_time = time.monotonic()
        self.logger.log(
            self.log_level, "Starting %s", self.operation, extra=self.kwargs
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Exit the context manager."""
        self.duration = time.monotonic() - self.start_time if self.start_time else 0.0

        if exc_type is None:
            self.logger.log(
                self.log_level,
                "Completed %s in %.3fs",
                self.operation,
                self.duration,
                extra=self.kwargs,
            )
        else:
            self.logger.error(
                "Failed %s in %.3fs: %s",
                self.operation,
                self.duration,
                exc_val,
                extra=self.kwargs,
                exc_info=not isinstance(exc_val, (KeyboardInterrupt, OSError)),
            )

        return False


def log_exception(logger: logging.Logger, exc: Exception, context: str = "") -> None:
    """Log an exception with context."""
    if isinstance(exc, TermFXError):
        logger.error(
            "%s: %s",
            context,
            exc.message,
            extra={"details": exc.details},
        )
    else:
        logger.exception("%s: %s", context, exc)
