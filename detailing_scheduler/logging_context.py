"""Query-id logging context and optional structured trace hooks.

Every availability query can be tagged with a query id so log lines from
the calendar walk, conflict checks and booking layer can be correlated.

Usage:
    from detailing_scheduler.logging_context import get_query_logger, set_query_id

    set_query_id("Q-1a2b3c")
    logger = get_query_logger(__name__)
    logger.debug("Probing slots")  # record.query_id == "Q-1a2b3c"

Trace hooks are the structured alternative to print debugging inside the
work projector. They are disabled unless a callable is passed in.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any, Callable, Optional

_query_id: ContextVar[str] = ContextVar("query_id", default="NO_QUERY_ID")

TraceHook = Callable[[str, dict[str, Any]], None]


def set_query_id(query_id: Optional[str] = None) -> str:
    """Set the correlation id for the current context and return it."""
    if query_id is None:
        query_id = f"Q-{uuid.uuid4().hex[:6]}"
    _query_id.set(query_id)
    return query_id


def get_query_id() -> str:
    """Retrieve the current correlation id."""
    return _query_id.get()


class QueryIdFilter(logging.Filter):
    """Injects query_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.query_id = _query_id.get()  # type: ignore[attr-defined]
        return True


def get_query_logger(name: str) -> logging.Logger:
    """Return a logger with the QueryIdFilter attached.

    The filter adds ``query_id`` to each record so formatters can
    include ``%(query_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, QueryIdFilter) for f in logger.filters):
        logger.addFilter(QueryIdFilter())
    return logger


def emit(trace: Optional[TraceHook], event: str, **fields: Any) -> None:
    """Send a trace event to ``trace`` if one was supplied."""
    if trace is not None:
        trace(event, fields)
