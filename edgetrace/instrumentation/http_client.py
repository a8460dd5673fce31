"""HTTP client helpers for context propagation."""

from __future__ import annotations

from typing import MutableMapping

from edgetrace.context.context import get_current_context
from edgetrace.context.propagators import inject_traceparent


def inject_headers(headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
    """
    Inject traceparent into the provided headers mapping if a current span exists.

    Returns the same headers mapping for convenience.
    """
    context = get_current_context()
    if context is not None:
        inject_traceparent(headers, context)
    return headers
