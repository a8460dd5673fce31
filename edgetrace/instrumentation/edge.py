"""Edge stage: mint a trace context before the request reaches the application.

The edge runtime has no tracing SDK, so nothing here starts spans or touches
OpenTelemetry. Ids come from a cryptographically strong source.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, MutableMapping, Optional

from edgetrace.context.propagators import extract_traceparent, inject_traceparent
from edgetrace.instrumentation.stage import DEFAULT_MATCHER, Stage
from edgetrace.tracer.trace_context import (
    SAMPLED_FLAG,
    SUPPORTED_VERSION,
    TraceContext,
    TraceIds,
)
from edgetrace.utils.helpers import to_hex
from edgetrace.utils.random_source import (
    SPAN_ID_BYTES,
    TRACE_ID_BYTES,
    RandomSource,
    SecretsRandomSource,
    random_id,
)

logger = logging.getLogger("edgetrace.edge")

_default_source = SecretsRandomSource()


def generate_trace_context(random_source: Optional[RandomSource] = None) -> TraceContext:
    """
    Generate a fresh, sampled root trace context.

    Raises:
        RandomSourceUnavailableError: if the random source fails
    """
    source = random_source or _default_source
    trace_id = random_id(source, TRACE_ID_BYTES)
    span_id = random_id(source, SPAN_ID_BYTES)
    return TraceContext(
        trace_id=to_hex(trace_id),
        span_id=to_hex(span_id),
        flags=SAMPLED_FLAG,
        version=SUPPORTED_VERSION,
    )


def format_request_log(stage_name: str, ids: TraceIds, method: str, url: str) -> str:
    return (
        f"[Request log from {stage_name}]\ttraceId={ids.trace_id}"
        f"\tspanId={ids.span_id}\tmethod={method}\turl={url}"
    )


class EdgeStage(Stage):
    """
    Sets traceparent on every inbound request and logs the ids once.

    By default any incoming traceparent is overwritten. With
    preserve_upstream=True a valid incoming header is kept as is.
    """

    def __init__(
        self,
        name: str = "middleware",
        matcher: Optional[str] = DEFAULT_MATCHER,
        preserve_upstream: bool = False,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        super().__init__(name, matcher)
        self.preserve_upstream = preserve_upstream
        self.random_source = random_source or _default_source

    def resolve_context(self, headers: MutableMapping[str, str]) -> TraceContext:
        if self.preserve_upstream:
            upstream = extract_traceparent(headers)
            if upstream is not None:
                return upstream
        return generate_trace_context(self.random_source)

    @contextmanager
    def enter(
        self,
        method: str,
        url: str,
        headers: MutableMapping[str, str],
    ) -> Iterator[TraceIds]:
        context = self.resolve_context(headers)
        inject_traceparent(headers, context)

        ids = TraceIds.of(context)
        logger.info(format_request_log(self.name, ids, method, url))
        yield ids
