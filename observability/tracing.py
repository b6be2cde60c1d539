"""Tracing and observability using Logfire/OpenTelemetry.

Optional distributed tracing for pipeline runs. When enabled, each run
becomes a span with one child span per stage, and PydanticAI model calls
are instrumented automatically.

Requirements:
    pip install logfire

Enable via configuration:
    ENABLE_LOGFIRE=true
    LOGFIRE_TOKEN=your-token  # Optional for cloud dashboard

Usage:
    >>> from observability.tracing import setup_tracing, trace_operation
    >>> setup_tracing(enabled=True, service_name="netpulse")
    >>> with trace_operation("collect"):
    ...     ...
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator

logger = logging.getLogger(__name__)


@dataclass
class TracingContext:
    """Context for tracing operations."""
    enabled: bool = False
    service_name: str = "netpulse"
    token: str = ""
    _logfire_configured: bool = field(default=False, init=False)


_context = TracingContext()


def setup_tracing(
    enabled: bool = False,
    service_name: str = "netpulse",
    token: str = "",
) -> TracingContext:
    """Set up tracing with Logfire.

    Args:
        enabled: Whether to enable tracing
        service_name: Name of the service for tracing
        token: Logfire authentication token

    Returns:
        TracingContext for the session
    """
    _context.enabled = enabled
    _context.service_name = service_name
    _context.token = token

    if not enabled:
        logger.debug("Tracing disabled")
        return _context

    try:
        import logfire

        logfire.configure(
            service_name=service_name,
            token=token if token else None,
        )
        logfire.instrument_pydantic_ai()

        _context._logfire_configured = True
        logger.info("Logfire tracing enabled | service=%s", service_name)

    except ImportError:
        logger.warning("Logfire not installed. Tracing disabled.")
        _context.enabled = False
    except Exception as e:
        logger.error("Failed to configure Logfire: %s", e)
        _context.enabled = False

    return _context


@contextmanager
def trace_operation(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[dict[str, Any], None, None]:
    """Context manager for tracing an operation.

    Args:
        name: Name of the operation
        attributes: Optional attributes to attach to the span

    Yields:
        Dictionary for adding additional attributes during the operation
    """
    span_attrs = attributes or {}
    start = time.monotonic()

    try:
        if _context.enabled and _context._logfire_configured:
            import logfire

            with logfire.span(name, **span_attrs) as span:
                result_attrs: dict[str, Any] = {}
                yield result_attrs
                for key, value in result_attrs.items():
                    span.set_attribute(key, value)
        else:
            yield {}
    finally:
        logger.debug("Operation '%s' finished in %.2fs", name, time.monotonic() - start)


class PipelineTracer:
    """Records per-stage timings of a report pipeline run."""

    def __init__(self, context: TracingContext | None = None):
        self.context = context or _context
        self.run_id: str | None = None
        self.stats: dict[str, Any] = {}

    @contextmanager
    def trace_run(self, run_id: str) -> Generator[None, None, None]:
        """Trace a complete pipeline run.

        Args:
            run_id: Unique identifier for this run
        """
        self.run_id = run_id
        self.stats = {"run_id": run_id, "stages": {}}
        start = time.monotonic()

        with trace_operation("pipeline_run", {"run_id": run_id}) as attrs:
            try:
                yield
            finally:
                self.stats["duration_seconds"] = round(time.monotonic() - start, 3)
                attrs["duration_seconds"] = self.stats["duration_seconds"]

    @contextmanager
    def trace_stage(self, stage: str) -> Generator[None, None, None]:
        """Trace one stage and record its duration.

        Args:
            stage: Stage name (collecting, summarizing, ...)
        """
        start = time.monotonic()
        with trace_operation(stage, {"run_id": self.run_id or "-"}):
            try:
                yield
            finally:
                self.stats["stages"][stage] = round(time.monotonic() - start, 3)

    def get_summary(self) -> dict[str, Any]:
        """Return a copy of all recorded statistics."""
        return {**self.stats, "stages": dict(self.stats.get("stages", {}))}
