"""Trace IDs and per-search context bound into structlog."""

import uuid
from contextvars import ContextVar
from typing import Any

import structlog

_trace_id: ContextVar[str] = ContextVar("trace_id", default="")


def generate_trace_id() -> str:
    """Generate a new trace ID."""
    return uuid.uuid4().hex[:16]


def get_trace_id() -> str:
    """Get current trace ID, or an empty string outside a trace."""
    return _trace_id.get()


class TraceContext:
    """Bind a trace ID and extra context (such as ``project_id``) while a search runs.

    Every log line emitted inside the block carries the bound values. On exit
    the previous trace ID is restored and the extra keys are unbound.
    """

    def __init__(self, trace_id: str | None = None, **context: Any):
        self._trace_id = trace_id or generate_trace_id()
        self._context = context
        self._previous_id = ""

    def __enter__(self) -> str:
        self._previous_id = get_trace_id()
        _trace_id.set(self._trace_id)
        structlog.contextvars.bind_contextvars(trace_id=self._trace_id, **self._context)
        return self._trace_id

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self._context)
        _trace_id.set(self._previous_id)
        if self._previous_id:
            structlog.contextvars.bind_contextvars(trace_id=self._previous_id)
        else:
            structlog.contextvars.unbind_contextvars("trace_id")
