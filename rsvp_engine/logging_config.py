"""Structured logging configuration for the RSVP engine"""

import inspect
import json
import logging
import time
from datetime import datetime
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Custom fields passed via extra={"extra_data": {...}}
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console formatter with colors"""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors"""
        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
        else:
            color = reset = ""

        log_msg = f"{color}[{record.levelname}]{reset} {record.name} - {record.getMessage()}"

        if hasattr(record, "extra_data") and "duration_ms" in record.extra_data:
            duration = record.extra_data["duration_ms"]
            log_msg += f" ({duration:.2f}ms)"

        if record.exc_info:
            log_msg += f"\n{self.formatException(record.exc_info)}"

        return log_msg


def setup_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """
    Setup logging configuration for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Emit JSON lines on the console instead of colored text
        log_file: Optional path for a rotating JSON log file
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JSONFormatter() if json_output else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # The per-tick path logs frame drops only; keep it at WARNING unless debugging
    playback_level = logging.DEBUG if log_level.upper() == "DEBUG" else logging.WARNING
    logging.getLogger("rsvp_engine.services.playback").setLevel(playback_level)


def log_performance(operation_name: str):
    """
    Decorator to log function execution time at DEBUG level.

    Failures are logged at WARNING and re-raised unchanged.

    Args:
        operation_name: Name of the operation for logging
    """

    def decorator(func: Callable) -> Callable:
        def _log_success(logger: logging.Logger, start_time: float) -> None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.debug(
                f"{operation_name} completed",
                extra={
                    "extra_data": {
                        "operation": operation_name,
                        "duration_ms": duration_ms,
                        "success": True,
                    }
                },
            )

        def _log_failure(logger: logging.Logger, start_time: float, error: Exception) -> None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.warning(
                f"{operation_name} failed: {error}",
                extra={
                    "extra_data": {
                        "operation": operation_name,
                        "duration_ms": duration_ms,
                        "success": False,
                        "error": str(error),
                        "error_type": type(error).__name__,
                    }
                },
            )

        @wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            logger = logging.getLogger(func.__module__)
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_failure(logger, start_time, e)
                raise
            _log_success(logger, start_time)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs) -> Any:
            logger = logging.getLogger(func.__module__)
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_failure(logger, start_time, e)
                raise
            _log_success(logger, start_time)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
