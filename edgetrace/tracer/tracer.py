"""Tracer using OpenTelemetry SDK, accepting a TraceContext as parent."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ContextManager, Dict, Optional

from opentelemetry.trace import Span as OTelSpan
from opentelemetry.trace import SpanKind
from opentelemetry.trace import Tracer as OTelTracer

from edgetrace.tracer.trace_context import TraceContext

if TYPE_CHECKING:
    from edgetrace.tracer.provider import TracerProvider


class Tracer:
    """Tracer wrapper that uses OpenTelemetry Tracer internally."""

    def __init__(self, provider: "TracerProvider", instrumentation_scope: str):
        self._provider = provider
        self.instrumentation_scope = instrumentation_scope
        self._otel_tracer: OTelTracer = provider.otel_provider.get_tracer(instrumentation_scope)

    def start_span(
        self,
        name: str,
        attributes: Optional[Dict[str, Any]] = None,
        parent_context: Optional[TraceContext] = None,
        kind: SpanKind = SpanKind.INTERNAL,
    ) -> OTelSpan:
        """
        Start a new span without activating it.

        With parent_context the span joins that trace as a child of the remote
        span: same trace id, freshly generated span id. Without it, the span
        is a child of the current span or a new root.
        """
        otel_parent_context = None
        if parent_context is not None:
            from edgetrace.context.context import context_with_parent
            otel_parent_context = context_with_parent(parent_context)

        return self._otel_tracer.start_span(
            name=name,
            context=otel_parent_context,
            kind=kind,
            attributes=attributes,
        )

    def start_as_current_span(
        self,
        name: str,
        attributes: Optional[Dict[str, Any]] = None,
        parent_context: Optional[TraceContext] = None,
        kind: SpanKind = SpanKind.INTERNAL,
    ) -> ContextManager[OTelSpan]:
        """
        Start a span and set it as current (context manager).

        The span ends and the previous span is restored when the block exits.
        Exceptions are recorded on the span and re-raised.
        """
        otel_parent_context = None
        if parent_context is not None:
            from edgetrace.context.context import context_with_parent
            otel_parent_context = context_with_parent(parent_context)

        return self._otel_tracer.start_as_current_span(
            name=name,
            context=otel_parent_context,
            kind=kind,
            attributes=attributes,
        )
