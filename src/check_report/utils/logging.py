"""Logging configuration using structlog for structured logging."""

import logging
import sys
from collections.abc import MutableMapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.stdlib import LoggerFactory, add_log_level, add_logger_name

# Standard library logging levels mapping
_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Global state for handlers
_configured = False
_handlers: list[logging.Handler] = []


def _get_level_no(level_name: str) -> int:
    """Get numeric log level from name."""
    return _LOG_LEVELS.get(level_name.upper(), logging.INFO)


def _add_application_context(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Rename the ``application`` key of an event to ``app``.

    Most events in this package are about a single application; the short
    key keeps console lines compact and is what JSON log consumers query.
    """
    application = event_dict.pop("application", None)
    if application is not None:
        event_dict["app"] = application
    return event_dict


def _shared_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_application_context,
    ]


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    colors: bool = True,
) -> None:
    """Configure structlog logging.

    Console output goes to stderr so rendered reports written to stdout stay
    clean. When ``log_file`` is given, a JSON log with size-based rotation is
    written as well.

    Args:
        log_level: Minimum console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional JSON log file path
        colors: Whether the console renderer uses ANSI colors
    """
    global _configured

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Only remove handlers we installed ourselves
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_get_level_no(log_level))
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=ConsoleRenderer(
                colors=colors,
                exception_formatter=structlog.dev.plain_traceback,
            ),
            foreign_pre_chain=_shared_processors(),
        )
    )
    root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(exist_ok=True, parents=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=JSONRenderer(),
                foreign_pre_chain=_shared_processors(),
            )
        )
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

    _configured = True

    get_logger(__name__).debug(
        "logging_configured",
        console_level=log_level,
        log_file=str(log_file) if log_file else None,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the given name
    """
    if not _configured:
        # Auto-configure with defaults if not configured
        configure_logging()

    return structlog.get_logger(name)
