"""Context utilities: traceparent codec and the active-span reader.

The codec is imported eagerly. The reader needs OpenTelemetry and loads on
first use.
"""

import importlib

from edgetrace.context.propagators import (
    TRACEPARENT_HEADER,
    extract_traceparent,
    format_traceparent,
    inject_traceparent,
    parse_traceparent,
)

_READER_NAMES = (
    "get_current_span",
    "get_current_context",
    "get_ids",
    "push_span",
    "pop_span",
)

__all__ = [
    "TRACEPARENT_HEADER",
    *_READER_NAMES,
    "format_traceparent",
    "parse_traceparent",
    "inject_traceparent",
    "extract_traceparent",
]


def __getattr__(name):
    if name not in _READER_NAMES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(importlib.import_module("edgetrace.context.context"), name)
    globals()[name] = value
    return value
