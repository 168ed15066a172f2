"""Logging setup: structlog on top of stdlib handlers.

Records go to stdout and to rotating files under ``log_dir``
(``<prefix>.log`` for everything, ``<prefix>_error.log`` for errors).
Production and staging render JSON lines; other environments get the
colored console renderer.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVIRONMENTS = ("production", "staging")

# Third-party loggers kept at WARNING
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "httpx")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def _environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def resolve_log_level(level: str | None = None) -> str:
    """Explicit level, else ``LOG_LEVEL``, else the environment's default."""
    if level:
        return level.upper()
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENVIRONMENT.get(_environment(), "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _install_handlers(level: str, log_dir: str, log_file_prefix: str) -> None:
    directory = Path(log_dir)
    directory.mkdir(exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(directory / f"{log_file_prefix}.log", level),
        _rotating_file(directory / f"{log_file_prefix}_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer():
    if _environment() in _JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def configure_logging(level: str | None = None, log_dir: str = "logs", log_file_prefix: str = "storefront") -> None:
    """Configure stdlib handlers and the structlog processor chain."""
    _install_handlers(resolve_log_level(level), log_dir, log_file_prefix)

    structlog.configure(
        processors=[
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
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(**values) -> None:
    """Attach key/value pairs to every log record of the current request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
