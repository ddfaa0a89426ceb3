"""
Logging configuration for geovalid.

The engine itself only logs at DEBUG level; this module gives it a
consistently formatted logger and a timing helper for checks.

Usage:
    from geovalid.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("Check started", extra={"kind": "Polygon"})
"""

import functools
import logging
import os
import sys
import time
from functools import lru_cache
from typing import Any, Callable

from .config import get_settings


_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class GeoValidFormatter(logging.Formatter):
    """One line per record, with `extra` fields appended as key=value pairs."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = [
            f"{key}={value}"
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        ]
        if extras:
            return f"{line} | {' '.join(extras)}"
        return line


class CheckLogger:
    """
    Context manager timing a validity check and logging its outcome.

    Usage:
        with CheckLogger(logger, "explain_invalidity", kind="Polygon") as log:
            report = run(geom)
            log.set_result(report)
    """

    def __init__(
        self,
        logger: logging.Logger,
        check_name: str,
        **params: Any,
    ):
        self.logger = logger
        self.check_name = check_name
        self.params = params
        self.result: Any = None
        self._start_time: float = 0

    def __enter__(self) -> "CheckLogger":
        self._start_time = time.perf_counter()
        self.logger.debug(
            f"Check '{self.check_name}' started",
            extra={"check": self.check_name, **self.params},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        elapsed_ms = (time.perf_counter() - self._start_time) * 1000

        if exc_val is not None:
            self.logger.error(
                f"Check '{self.check_name}' failed: {exc_val}",
                extra={
                    "check": self.check_name,
                    "elapsed_ms": f"{elapsed_ms:.2f}",
                    "error": str(exc_val),
                },
                exc_info=True,
            )
            return False  # Re-raise exception

        self.logger.debug(
            f"Check '{self.check_name}' completed",
            extra={
                "check": self.check_name,
                "elapsed_ms": f"{elapsed_ms:.2f}",
                "result": self._summarize_result(self.result),
            },
        )
        return False

    def set_result(self, result: Any) -> None:
        """Set the result for logging."""
        self.result = result

    def _summarize_result(self, result: Any) -> str:
        """Create a brief summary of the result for logging."""
        if result is None:
            return "valid"
        if isinstance(result, bool):
            return "valid" if result else "invalid"
        if isinstance(result, list):
            return f"problems={len(result)}"
        return str(type(result).__name__)


def get_log_level() -> int:
    """
    Get log level from environment variable.

    LOG_LEVEL takes precedence; otherwise Settings.log_level is used
    (GEOVALID_LOG_LEVEL or .env).
    Supports: DEBUG, INFO, WARNING, ERROR, CRITICAL
    Default: INFO
    """
    level_name = (os.environ.get("LOG_LEVEL") or get_settings().log_level).upper()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    return level_map.get(level_name, logging.INFO)


@lru_cache(maxsize=None)
def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Loggers are cached to avoid duplicate handlers.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured logging.Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(get_log_level())

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(get_log_level())
        handler.setFormatter(GeoValidFormatter())

        logger.addHandler(handler)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

    return logger


def log_check(logger: logging.Logger, check_name: str) -> Callable:
    """
    Decorator factory wrapping a check function in a CheckLogger.

    The first positional argument is taken to be the geometry; its kind is
    added to the log record.

    Usage:
        @log_check(logger, "is_valid")
        def is_valid(geometry) -> bool:
            ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(geometry, *args, **kwargs):
            kind = getattr(getattr(geometry, "kind", None), "value", type(geometry).__name__)
            with CheckLogger(logger, check_name, kind=kind) as log:
                result = func(geometry, *args, **kwargs)
                log.set_result(result)
                return result
        return wrapper
    return decorator
