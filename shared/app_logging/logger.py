"""
Standardized logging utilities for the Health Headlines service.
Provides structured logging with correlation IDs and consistent formatting.
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

from shared.config.settings import Settings, get_settings

# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'taskName', 'message',
    'exc_info', 'exc_text', 'stack_info', 'correlation_id', 'service_name',
}


class CorrelationIDFilter(logging.Filter):
    """Logging filter to add correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "no-correlation-id"
        return True


class ServiceNameFilter(logging.Filter):
    """Stamps every record passing through a handler with the service name."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, 'correlation_id', 'no-correlation-id'),
            "service": getattr(record, 'service_name', 'unknown'),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class StructuredFormatter(logging.Formatter):
    """Structured formatter for human-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        correlation_id = getattr(record, 'correlation_id', 'no-correlation-id')
        service = getattr(record, 'service_name', 'unknown')

        # Format: [timestamp] [level] [service] [correlation_id] logger: message
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]

        base_msg = f"[{timestamp}] [{record.levelname}] [{service}] [{correlation_id}] {record.name}: {record.getMessage()}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    include_correlation_id: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> logging.Logger:
    """
    Set up standardized logging for a service.

    Child loggers (``<service_name>.client`` and so on) propagate to the
    handler installed here.

    Args:
        service_name: Name of the service (e.g., 'headlines')
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to use JSON formatting
        include_correlation_id: Whether to include correlation IDs
        settings: Settings to read defaults from; the cached settings otherwise

    Returns:
        Configured logger instance
    """
    settings = settings or get_settings()

    level = log_level or settings.logging.level
    use_json = json_logs if json_logs is not None else settings.logging.json_logs
    include_corr_id = include_correlation_id if include_correlation_id is not None else settings.logging.include_correlation_id

    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(JSONFormatter() if use_json else StructuredFormatter())
    handler.addFilter(ServiceNameFilter(service_name))

    if include_corr_id:
        handler.addFilter(CorrelationIDFilter())

    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific service or component."""
    return logging.getLogger(name)


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID."""
    return correlation_id_var.get()


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


class CorrelationContext:
    """Context manager for setting correlation IDs."""

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self._token = None

    def __enter__(self) -> str:
        self._token = correlation_id_var.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        correlation_id_var.reset(self._token)
