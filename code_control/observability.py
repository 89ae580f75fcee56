"""
Structured Logging with structlog

Logs go to stderr so that reports printed on stdout stay machine-readable.
"""

import logging
import sys
import time
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars

from code_control.errors import ControlError


def setup_logging(
    level: str = "WARNING",
    format: str = "console",  # "json" or "console"
    include_timestamp: bool = True,
) -> None:
    """
    Setup structured logging for the CLI.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" for pipelines, "console" for humans)
        include_timestamp: Include timestamp in logs
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    # force=True so a second CLI invocation in the same process can reconfigure
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    shared_processors = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if include_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso"))

    shared_processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]
    )

    if format == "json":
        output_processors = [
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        output_processors = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=shared_processors + output_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("file_extracted", path="src/app.js", regions=2)
        ```
    """
    return structlog.get_logger(name)


class LogPerformance:
    """
    Context manager for automatic performance logging.

    Example:
        ```python
        with LogPerformance(logger, "extract_regions", root="src/"):
            extract()
        ```
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger, operation: str, **extra: Any):
        self.logger = logger
        self.operation = operation
        self.extra = extra
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        duration_ms = round((time.time() - self.start_time) * 1000, 2)

        if exc_type is not None:
            # ControlErrors are reported to the user by the CLI
            log = self.logger.debug if issubclass(exc_type, ControlError) else self.logger.error
            log(
                f"{self.operation}_failed",
                error_type=exc_type.__name__,
                error_message=str(exc_val),
                duration_ms=duration_ms,
                **self.extra,
            )
        else:
            self.logger.info("operation_complete", operation=self.operation, duration_ms=duration_ms, **self.extra)

        return False
