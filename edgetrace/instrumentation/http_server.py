"""HTTP server helpers for extracting context and creating server spans."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional

from opentelemetry.trace import SpanKind

from edgetrace.context.context import get_ids
from edgetrace.context.propagators import extract_traceparent
from edgetrace.instrumentation.stage import Stage
from edgetrace.tracer.trace_context import TraceContext, TraceIds
from edgetrace.tracer.tracer import Tracer


def extract_parent_context(headers: Mapping[str, str]) -> Optional[TraceContext]:
    """Parse traceparent from headers and return TraceContext if valid."""
    return extract_traceparent(headers)


def start_server_span(tracer: Tracer, name: str, headers: Mapping[str, str], attributes=None):
    """
    Convenience helper to start a server span with extracted parent context.

    Returns the span context manager (caller should use 'with').
    """
    parent_ctx = extract_parent_context(headers)
    return tracer.start_as_current_span(
        name,
        attributes=attributes,
        parent_context=parent_ctx,
        kind=SpanKind.SERVER,
    )


class ServerStage(Stage):
    """
    Wraps each request in a server span parented on the incoming traceparent.

    Inside the block the span is current, so get_ids() reports the incoming
    trace id together with the server span's own span id.
    """

    def __init__(
        self,
        name: str = "http.request",
        matcher: Optional[str] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        super().__init__(name, matcher)
        self._tracer = tracer

    @property
    def tracer(self) -> Tracer:
        if self._tracer is None:
            # Lazy import to avoid circular import when edgetrace initializes.
            from edgetrace.auto import get_tracer
            self._tracer = get_tracer("edgetrace.server")
        return self._tracer

    @contextmanager
    def enter(
        self,
        method: str,
        url: str,
        headers: MutableMapping[str, str],
    ) -> Iterator[TraceIds]:
        attrs: Dict[str, Any] = {
            "http.method": method,
            "http.url": url,
        }
        with start_server_span(self.tracer, self.name, headers, attributes=attrs):
            yield get_ids()
