"""Logging setup for the Order Management services.

Every service process calls :func:`configure_logging` once with its own name.
Records go to stdout and to ``<log_dir>/<service>.log``; errors also land in
``<service>_error.log``. structlog renders them as JSON in production and
staging and as a coloured console everywhere else. Each event carries the
``service`` and ``version`` that emitted it, so the output of the four
services can be interleaved and still told apart.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_ROTATE_BYTES = 10 * 1024 * 1024
_ROTATE_COUNT = 5

_QUIET_LOGGERS = {
    "urllib3": logging.WARNING,
    "asyncio": logging.WARNING,
    "passlib": logging.ERROR,
    "sqlalchemy.engine": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _current_env() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` wins; otherwise the level follows the environment."""
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENV.get(_current_env(), "INFO")).upper()


class ServiceStamper:
    """structlog processor adding the emitting service to every event."""

    def __init__(self, service: str, version: str | None = None):
        self.service = service
        self.version = version

    def __call__(self, logger, method_name, event_dict):
        event_dict.setdefault("service", self.service)
        if self.version:
            event_dict.setdefault("version", self.version)
        return event_dict


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_ROTATE_BYTES,
        backupCount=_ROTATE_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(service: str, level: str | None = None, log_dir: str | None = "logs") -> None:
    """Route stdlib logging to stdout and, when ``log_dir`` is set, to per-service files."""
    log_level = level or get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_rotating(log_path / f"{service}.log", log_level))
        root_logger.addHandler(_rotating(log_path / f"{service}_error.log", logging.ERROR))

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def build_processors(service: str, version: str | None = None, json: bool | None = None) -> list:
    """The structlog processor chain for one service."""
    if json is None:
        json = _current_env() in ("production", "staging")

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        ServiceStamper(service, version),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
            )
        )
    return processors


def configure_logging(
    service: str = "ordermgmt",
    version: str | None = None,
    level: str | None = None,
    log_dir: str | None = "logs",
) -> None:
    """Configure stdlib handlers and structlog for ``service``."""
    setup_stdlib_logging(service, level=level, log_dir=log_dir)
    structlog.configure(
        processors=build_processors(service, version),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values onto every later event of the current request or task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
