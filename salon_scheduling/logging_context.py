"""Request ID logging context for tracing one scheduling run across modules.

Every group-booking computation runs inside a :func:`request_scope`. The
distributor, assigner and planner log through request-aware loggers, so
their lines for one run carry the same ``request_id`` attribute and can be
grepped together even when several computations interleave on one event
loop.

Usage:
    from salon_scheduling.logging_context import get_request_logger, request_scope

    logger = get_request_logger(__name__)
    with request_scope() as request_id:
        logger.info("Planning group booking")  # record.request_id == request_id
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "NO_REQUEST_ID"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def get_request_id() -> str:
    """Current request ID, or ``NO_REQUEST_ID`` outside a scope."""
    return _request_id.get()


def make_request_id() -> str:
    return f"REQ-{uuid.uuid4().hex[:8]}"


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request ID for the block and restore the previous one after."""
    token = _request_id.set(request_id or make_request_id())
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Copies the current request ID onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def get_request_logger(name: str) -> logging.Logger:
    """Module logger with a single :class:`RequestIdFilter` attached."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
