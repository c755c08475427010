"""OpenTelemetry span instrumentation for aggregate operations.

Spans are pure instrumentation: a broken tracer never changes the outcome of
the wrapped call. Only the OpenTelemetry API is used here; exporters and SDK
wiring belong to the hosting process.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace

from .logging import get_logger

logger = get_logger(__name__)

TRACER_NAME = "check_report"

F = TypeVar("F", bound=Callable[..., Any])


def get_tracer() -> trace.Tracer:
    """Return the package tracer from the globally configured provider."""
    return trace.get_tracer(TRACER_NAME)


def _start_span(span_name: str) -> trace.Span | None:
    try:
        return get_tracer().start_span(span_name)
    except Exception as e:
        logger.warning(
            "trace_span_start_failed",
            span=span_name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return None


def _end_span(span: trace.Span | None, span_name: str) -> None:
    if span is None:
        return
    try:
        span.end()
    except Exception as e:
        logger.warning(
            "trace_span_end_failed",
            span=span_name,
            error=str(e),
            error_type=type(e).__name__,
        )


def traced(span_name: str) -> Callable[[F], F]:
    """Wrap a callable in a named span.

    Exceptions raised by the wrapped callable propagate unchanged; failures
    to start or end the span are logged and ignored.

    Args:
        span_name: Name of the span, e.g. "AddNewApp"
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            span = _start_span(span_name)
            try:
                return func(*args, **kwargs)
            finally:
                _end_span(span, span_name)

        return wrapper  # type: ignore[return-value]

    return decorator
