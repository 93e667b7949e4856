"""
Structured logging configuration.

Provides consistent, structured logging across the library. Nothing here
runs at import time; callers (the CLI, an application) opt in through
``setup_logging``. Without it, records propagate to whatever the host
application has configured.
"""

import sys
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import json
from pathlib import Path

from .config import Settings, get_settings

PACKAGE_LOGGER = "math_matrix"


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text log formatter"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def setup_logging(
    config: Optional[Settings] = None,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the package logger.

    Only the ``math_matrix`` logger hierarchy is configured; the root logger
    of the host application is left alone. Calling this again replaces the
    handlers installed by the previous call.
    """
    config = config or get_settings()
    package_logger = logging.getLogger(logger_name)

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    # Determine log level
    log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)

    # Create formatter
    if config.LOG_FORMAT == "json":
        formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    handlers = [console_handler]

    # File handler (if configured)
    if config.LOG_FILE:
        log_path = Path(config.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Enhanced logger with structured context"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Add context to log messages"""
        # Extract extra data
        extra_data = kwargs.pop("extra_data", {})

        # Add to record
        if "extra" not in kwargs:
            kwargs["extra"] = {}

        kwargs["extra"]["extra_data"] = {
            **self.extra,
            **extra_data
        }

        return msg, kwargs


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """Get logger with permanent context"""
    logger = get_logger(name)
    return LoggerAdapter(logger, context)


# Example usage:
# logger = get_context_logger(__name__, component="determinant")
# logger.debug("Expanding determinant", extra_data={"size": 3})
