"""
FastAPI middleware helpers for running a Stage around each HTTP request.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Any, Awaitable, Callable, Dict, MutableMapping

from edgetrace.context.context import get_current_span
from edgetrace.context.propagators import TRACEPARENT_HEADER, get_header
from edgetrace.errors import EdgeTraceError
from edgetrace.instrumentation.stage import Stage

logger = logging.getLogger("edgetrace.instrumentation")

_TRACEPARENT_RAW = TRACEPARENT_HEADER.encode("latin-1")


def _write_traceparent(scope: MutableMapping[str, Any], headers: Dict[str, str]) -> None:
    """Copy the traceparent value from headers back into the raw ASGI scope."""
    raw = [(k, v) for k, v in scope["headers"] if k.lower() != _TRACEPARENT_RAW]
    value = get_header(headers, TRACEPARENT_HEADER)
    if value is not None:
        raw.append((_TRACEPARENT_RAW, value.encode("latin-1")))
    scope["headers"] = raw


def install_http_middleware(app: Any, stage: Stage) -> None:
    """
    Attach an HTTP middleware that runs stage around each request.

    - Skips paths the stage's matcher excludes
    - Forwards the request with the headers the stage produced
    - Never fails the request because of a tracing fault
    """

    @app.middleware("http")
    async def tracing_middleware(request, call_next: Callable[[Any], Awaitable[Any]]):  # type: ignore
        if not stage.applies_to(request.url.path):
            return await call_next(request)

        headers = dict(request.headers.items())
        with ExitStack() as stack:
            try:
                stack.enter_context(stage.enter(request.method, str(request.url), headers))
            except EdgeTraceError as e:
                logger.warning(f"{stage.name}: forwarding request without trace context: {e}")
                if not getattr(stage, "preserve_upstream", True):
                    # an upstream header the stage would have replaced must not leak through
                    _write_traceparent(request.scope, {})
            else:
                _write_traceparent(request.scope, headers)

            response = await call_next(request)
            span = get_current_span()
            if span is not None and span.is_recording():
                span.set_attribute("http.status_code", response.status_code)
            return response

    return None
