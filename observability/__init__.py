"""Observability infrastructure: logging setup and optional tracing.

setup_logging / set_run_context / attach_callbacks:
    Console + file logging with run-id propagation, and a bridge into a
    function runtime's log/error callbacks.

setup_tracing / trace_operation / PipelineTracer:
    Optional Logfire spans per run and per stage.

Enable tracing via configuration:
    ENABLE_LOGFIRE=true
    LOGFIRE_TOKEN=your-token  # Optional
"""

from observability.logging import (
    attach_callbacks,
    clear_context,
    set_run_context,
    setup_logging,
)
from observability.tracing import PipelineTracer, TracingContext, setup_tracing, trace_operation

__all__ = [
    "setup_logging",
    "set_run_context",
    "clear_context",
    "attach_callbacks",
    "setup_tracing",
    "trace_operation",
    "PipelineTracer",
    "TracingContext",
]
