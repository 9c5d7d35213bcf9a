"""Structured Logging Module.

Structured logging built on the standard logging module, plus a
module-scoped registry of scoped service loggers.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from config.constants import DEFAULT_LOG_SCOPE, LogArea
from config.settings import get_log_settings

# Context variable for service context tracking
service_context_var: ContextVar[Dict[str, Any]] = ContextVar(
    "service_context",
    default={}
)

_STANDARD_RECORD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "extra_fields", "taskName",
})


class ContextFilter(logging.Filter):
    """Filter to inject extra fields into log records.

    This filter merges extra keyword arguments from logger calls
    into the record so that formatters can access them.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject extra fields into log record.

        Args:
            record: Log record to process.

        Returns:
            Always True to allow the record to be processed.
        """
        if not hasattr(record, "extra_fields"):
            record.extra_fields = {}

        # bound context (instance name, worker id 등)
        context = service_context_var.get()
        if context:
            record.extra_fields.update(context)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                record.extra_fields[key] = value

        return True


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs log records as JSON objects:
    {"timestamp", "level", "logger", "message", "module", "function", "line", ...extra}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Text log formatter for human-readable output.

    Outputs readable log messages with extra fields appended.
    """

    def __init__(self) -> None:
        """Initialize text formatter."""
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text.

        Args:
            record: Log record to format.

        Returns:
            Text-formatted log string.
        """
        base_msg = super().format(record)

        if hasattr(record, "extra_fields") and record.extra_fields:
            extras = " ".join(f"{k}={v}" for k, v in record.extra_fields.items())
            return f"{base_msg} | {extras}"

        return base_msg


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that supports keyword arguments for extra fields.

    Allows logging with extra fields like:
        logger.info("message", key1=value1, key2=value2)
    """

    def process(
        self, msg: str, kwargs: Dict[str, Any]
    ) -> tuple[str, Dict[str, Any]]:
        """Process log message and extract extra fields.

        Args:
            msg: Log message.
            kwargs: Keyword arguments passed to logging call.

        Returns:
            Tuple of (message, modified kwargs).
        """
        extra = dict(kwargs.get("extra") or {})
        standard_kwargs = {"exc_info", "stack_info", "stacklevel", "extra"}

        for key in list(kwargs.keys()):
            if key not in standard_kwargs:
                extra[key] = kwargs.pop(key)

        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging() -> None:
    """Initialize logging system.

    Configures logging in JSON or text format based on LogSettings.
    """
    settings = get_log_settings()

    numeric_level = getattr(logging, settings.level.upper(), logging.INFO)

    if settings.format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = TextFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # 기존 핸들러 제거
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ContextFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> ContextLogger:
    """Return Logger instance.

    Args:
        name: Logger name. If None, returns the root logger.

    Returns:
        ContextLogger instance that supports keyword arguments.
    """
    logger = logging.getLogger(name)
    return ContextLogger(logger, {})


def bind_context(**kwargs: Any) -> None:
    """Bind values to global logging context.

    Bound values will be included in all subsequent logs.

    Args:
        **kwargs: Key-value pairs to bind.
    """
    current = service_context_var.get().copy()
    current.update(kwargs)
    service_context_var.set(current)


def unbind_context(*keys: str) -> None:
    """Remove values from global logging context.

    Args:
        *keys: List of keys to remove.
    """
    current = service_context_var.get().copy()
    for key in keys:
        current.pop(key, None)
    service_context_var.set(current)


def clear_context() -> None:
    """Clear global logging context."""
    service_context_var.set({})


# ============================================================
# Scoped logger registry
# ============================================================


class LoggerRegistry:
    """Cache of scoped service loggers.

    Loggers are keyed by ``scope`` and optional ``area`` and named
    ``scope`` or ``scope.area`` so that area loggers propagate to the
    scope logger. Clearing the registry is always safe; it only drops
    cached adapters.
    """

    def __init__(self) -> None:
        self._loggers: dict[str, ContextLogger] = {}

    def get(
        self,
        scope: str,
        area: Optional[Union[LogArea, str]] = None,
    ) -> ContextLogger:
        """Create or return the cached logger for a scope and area.

        Args:
            scope: Service scope (e.g. "electron-service").
            area: Optional area within the scope (e.g. "launcher").

        Returns:
            ContextLogger instance.

        Raises:
            ValueError: If scope is empty.
        """
        if not scope:
            raise ValueError("scope is required when creating a logger")

        area_name = str(area) if area else ""
        key = f"{scope}:{area_name}"
        cached = self._loggers.get(key)
        if cached is not None:
            return cached

        name = f"{scope}.{area_name}" if area_name else scope
        logger = get_logger(name)
        self._loggers[key] = logger
        return logger

    def clear(self) -> None:
        """Drop all cached loggers."""
        self._loggers.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._loggers

    def __len__(self) -> int:
        return len(self._loggers)


_registry = LoggerRegistry()


def get_logger_registry() -> LoggerRegistry:
    """Return the module-scoped logger registry."""
    return _registry


def create_logger(
    scope: str = DEFAULT_LOG_SCOPE,
    area: Optional[Union[LogArea, str]] = None,
) -> ContextLogger:
    """Create or return a cached scoped logger.

    Example:
        ```python
        logger = create_logger("tauri-service", LogArea.LAUNCHER)
        logger.info("Service started", instance="app-a")
        ```
    """
    return _registry.get(scope, area)


def clear_logger_registry() -> None:
    """Clear the logger registry (for testing)."""
    _registry.clear()
