"""Logging configuration for the Ordering domain.

Standard library logging carries the handlers (console plus rotating files);
structlog sits on top and renders JSON in production-like environments and a
console view with rich tracebacks everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def current_env() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Get log level based on environment, overridable with LOG_LEVEL."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_env(), "INFO")).upper()


def setup_stdlib_logging(log_dir: str | None = None) -> None:
    """Configure standard library logging handlers."""
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    log_path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    if current_env() != "test":
        log_path.mkdir(exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / "ordering.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / "ordering_error.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(error_handler)

    # Suppress noisy library loggers
    logging.getLogger("protean").setLevel(logging.WARNING)
    logging.getLogger("weasyprint").setLevel(logging.ERROR)
    logging.getLogger("fontTools").setLevel(logging.ERROR)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def setup_structlog() -> None:
    """Configure structlog processors and renderer."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if current_env() in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=False,
                    max_frames=4,
                ),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging()
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log messages of this request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
