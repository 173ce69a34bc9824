"""Logging configuration using structlog.

Request handlers bind ``request_id`` (and, behind the token gate, the admin)
into contextvars; every log line emitted while serving that request carries them.
"""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

_QUIET_LIBRARIES = {
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "multipart": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def setup_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog for structured logging.

    Args:
        debug: If True, use colored console output. If False, use JSON lines.
        level: Root log level name; defaults to DEBUG when ``debug`` else INFO.
    """
    log_level = logging.getLevelName(level.upper()) if level else None
    if not isinstance(log_level, int):
        log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        # Tracebacks become a string field so each event stays one JSON line
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name, library_level in _QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional logger name.

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Bind request-level context to all subsequent log calls.

    Args:
        request_id: The correlation ID for the current request.
    """
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_admin_context(admin_id: int, username: str) -> None:
    """Bind the authenticated admin to all subsequent log calls.

    Args:
        admin_id: The admin user's ID taken from the access token.
        username: The admin username taken from the access token.
    """
    bind_contextvars(admin_id=admin_id, admin_username=username)


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()
