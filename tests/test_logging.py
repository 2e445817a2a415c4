"""
Tests for logging setup and request-id stamping.
"""

import logging

from structured_mapper.core.logging import (
    MAPPER_LOGGER_NAME,
    RequestIdFilter,
    request_id_var,
    setup_logging,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)


def test_request_id_filter_stamps_current_request() -> None:
    token = request_id_var.set("req-1")
    try:
        record = _record()
        assert RequestIdFilter().filter(record)
        assert record.request_id == "req-1"
    finally:
        request_id_var.reset(token)


def test_request_id_filter_outside_request() -> None:
    record = _record()
    assert RequestIdFilter().filter(record)
    assert not hasattr(record, "request_id")


def test_setup_logging_mapper_level() -> None:
    root = logging.getLogger()
    handlers = root.handlers[:]
    root_level = root.level
    names = (MAPPER_LOGGER_NAME, "httpcore", "httpx", "uvicorn.access", "asyncio")
    levels = {name: logging.getLogger(name).level for name in names}

    setup_logging(level="INFO", log_format="console", mapper_level="debug")
    try:
        assert logging.getLogger(MAPPER_LOGGER_NAME).level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0] not in handlers
    finally:
        # Hand pytest back its capture handlers
        root.handlers[:] = handlers
        root.setLevel(root_level)
        for name, level in levels.items():
            logging.getLogger(name).setLevel(level)

    assert root.handlers == handlers
