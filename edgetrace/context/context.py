"""Context helpers for reading the active span - using OpenTelemetry directly."""

from contextvars import Token
from typing import Optional

from opentelemetry import context as context_api
from opentelemetry.trace import NonRecordingSpan
from opentelemetry.trace import Span as OTelSpan
from opentelemetry.trace import SpanContext as OTelSpanContext
from opentelemetry.trace import TraceFlags
from opentelemetry.trace import get_current_span as otel_get_current_span
from opentelemetry.trace import set_span_in_context

from edgetrace.tracer.trace_context import TraceContext, TraceIds
from edgetrace.utils.helpers import (
    format_span_id,
    format_trace_id,
    parse_span_id,
    parse_trace_id,
)


def get_current_span() -> Optional[OTelSpan]:
    """
    Return the span active in the caller's execution scope, if any.

    OpenTelemetry keeps the current span in a context variable, so a thread
    or asyncio task only sees spans it (or its parent task) attached.
    """
    span = otel_get_current_span()
    if span.get_span_context().is_valid:
        return span
    return None


def get_current_context() -> Optional[TraceContext]:
    """Return the active span's context as a TraceContext."""
    span = get_current_span()
    if span is None:
        return None
    return from_otel_span_context(span.get_span_context())


def get_ids() -> TraceIds:
    """
    Get trace_id and span_id of the current span for logging.

    Returns ("null", "null") outside any active span; never raises.
    """
    context = get_current_context()
    if context is None:
        return TraceIds.absent()
    return TraceIds.of(context)


def push_span(span: OTelSpan) -> Token:
    """
    Attach a span as current in the caller's scope.

    Returns:
        Token needed to restore the previous state
    """
    return context_api.attach(set_span_in_context(span))


def pop_span(token: Token) -> None:
    """
    Restore the previous span context using the provided token.

    Args:
        token: Token returned by push_span()
    """
    context_api.detach(token)


def from_otel_span_context(otel_context: OTelSpanContext) -> TraceContext:
    """Convert OTel SpanContext to TraceContext."""
    return TraceContext(
        trace_id=format_trace_id(otel_context.trace_id),
        span_id=format_span_id(otel_context.span_id),
        flags=int(otel_context.trace_flags),
    )


def to_otel_span_context(context: TraceContext, is_remote: bool = True) -> OTelSpanContext:
    """Convert TraceContext to an OTel SpanContext, remote by default."""
    return OTelSpanContext(
        trace_id=parse_trace_id(context.trace_id),
        span_id=parse_span_id(context.span_id),
        is_remote=is_remote,
        trace_flags=TraceFlags(context.flags),
    )


def context_with_parent(context: TraceContext) -> context_api.Context:
    """Build an OTel Context whose current span is the given remote parent."""
    return set_span_in_context(NonRecordingSpan(to_otel_span_context(context)))
