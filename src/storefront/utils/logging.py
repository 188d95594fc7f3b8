"""Logging for the storefront.

structlog owns rendering. Records from the standard library (Protean,
uvicorn) are routed through the same ``ProcessorFormatter`` as structlog
events, so every line on the console and in the log files looks alike.

Environment:
    PROTEAN_ENV / ENV   selects defaults ("production" and "staging" log JSON)
    LOG_LEVEL           overrides the level picked for the environment
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {"production": "INFO", "staging": "INFO", "development": "DEBUG", "test": "WARNING"}
_JSON_ENVIRONMENTS = ("production", "staging")
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "multipart")

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5


def current_environment() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENV") or "development").lower()


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]


def _final_processors(environment: str, colors: bool) -> list:
    if environment in _JSON_ENVIRONMENTS:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    formatter = structlog.dev.RichTracebackFormatter(max_frames=2) if colors else structlog.dev.plain_traceback
    return [structlog.dev.ConsoleRenderer(colors=colors, exception_formatter=formatter)]


def _formatter(environment: str, colors: bool) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_final_processors(environment, colors),
        ],
    )


def _rotating(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(log_dir: str | None = "logs", log_file_prefix: str = "storefront") -> None:
    """Install console and rotating file handlers and configure structlog.

    Test runs log to the console only.
    """
    environment = current_environment()
    level = os.getenv("LOG_LEVEL", _LEVELS.get(environment, "INFO")).upper()

    console = logging.StreamHandler()
    console.setFormatter(_formatter(environment, colors=True))
    handlers: list[logging.Handler] = [console]

    if log_dir and environment != "test":
        path = Path(log_dir)
        path.mkdir(exist_ok=True)
        plain = _formatter(environment, colors=False)
        handlers.append(_rotating(path / f"{log_file_prefix}.log", logging.NOTSET, plain))
        handlers.append(_rotating(path / f"{log_file_prefix}_error.log", logging.ERROR, plain))

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every event logged until the context is cleared."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
