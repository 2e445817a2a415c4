"""
Structured logging configuration.

Provides two formats:
  - **json**  (default in production): one JSON object per line.
  - **console** (default in development): human-friendly output.

The mapping core logs rule registration and mapper finalization at DEBUG,
which is chatty when many mappers are built per request. Its level can be
tuned separately through ``mapper_level``.

Usage:
    from structured_mapper.core.logging import setup_logging, get_logger

    setup_logging(level="INFO", log_format="console")
    logger = get_logger(__name__)
    logger.info("Customer mapped", extra={"customer_id": 12345})
"""

import logging
import sys
from contextvars import ContextVar
from typing import Literal

from pythonjsonlogger import json as json_logger


MAPPER_LOGGER_NAME = "structured_mapper.mappers"

# Set per request by RequestContextMiddleware
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

LOG_FORMAT_CONSOLE = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
)

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_format: Literal["json", "console"] = "json",
    mapper_level: str | None = None,
) -> None:
    """
    Configure the root logger for the whole process.

    Args:
        level:        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format:   'json' for structured JSON lines, 'console' for human-readable.
        mapper_level: Optional level for the mapping core loggers only.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Drop handlers from a previous call so lines are not duplicated
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level.upper())

    if log_format == "json":
        formatter = _build_json_formatter()
    else:
        formatter = logging.Formatter(
            LOG_FORMAT_CONSOLE, datefmt=LOG_DATE_FORMAT)

    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)

    if mapper_level:
        logging.getLogger(MAPPER_LOGGER_NAME).setLevel(mapper_level.upper())

    for noisy in ("httpcore", "httpx", "uvicorn.access", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root_logger.info(
        "Logging initialised",
        extra={
            "log_level": level.upper(),
            "log_format": log_format,
            "mapper_level": (mapper_level or level).upper(),
        },
    )


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger.

    Convention: call with ``get_logger(__name__)`` in each module.
    """
    return logging.getLogger(name)


class RequestIdFilter(logging.Filter):
    """Stamp the current request id (if any) onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = request_id_var.get()
        if request_id is not None and not hasattr(record, "request_id"):
            record.request_id = request_id  # type: ignore[attr-defined]
        return True


# ─── Internal ─────────────────────────────────────────────────────────


def _build_json_formatter() -> json_logger.JsonFormatter:
    """JSON formatter with timestamp/level/logger renamed for log shippers."""
    return json_logger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt=LOG_DATE_FORMAT,
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
        },
    )
