"""Tests for trace context binding."""

import structlog

from deployboard.observability.tracing import TraceContext, get_trace_id


def setup_function() -> None:
    structlog.contextvars.clear_contextvars()


def test_trace_context_binds_trace_id_and_project() -> None:
    with TraceContext(project_id="Vega") as trace_id:
        bound = structlog.contextvars.get_contextvars()
        assert bound == {"trace_id": trace_id, "project_id": "Vega"}
        assert get_trace_id() == trace_id

    assert structlog.contextvars.get_contextvars() == {}
    assert get_trace_id() == ""


def test_nested_trace_context_restores_outer_trace() -> None:
    with TraceContext("outer", project_id="Vega"):
        with TraceContext("inner", search="deploys"):
            assert structlog.contextvars.get_contextvars()["trace_id"] == "inner"

        bound = structlog.contextvars.get_contextvars()
        assert bound == {"trace_id": "outer", "project_id": "Vega"}
        assert get_trace_id() == "outer"
