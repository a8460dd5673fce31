"""Stages, HTTP middleware and outbound patching.

The edge stage is imported eagerly. Server-side pieces pull in OpenTelemetry
and load on first use.
"""

import importlib

from edgetrace.instrumentation.stage import DEFAULT_MATCHER, Stage
from edgetrace.instrumentation.edge import EdgeStage, generate_trace_context

# public name -> (module, attribute)
_LAZY_IMPORTS = {
    "ServerStage": ("edgetrace.instrumentation.http_server", "ServerStage"),
    "extract_parent_context": ("edgetrace.instrumentation.http_server", "extract_parent_context"),
    "start_server_span": ("edgetrace.instrumentation.http_server", "start_server_span"),
    "inject_http_headers": ("edgetrace.instrumentation.http_client", "inject_headers"),
    "patch_requests": ("edgetrace.instrumentation.requests", "patch_requests"),
    "unpatch_requests": ("edgetrace.instrumentation.requests", "unpatch_requests"),
    "install_http_middleware": ("edgetrace.instrumentation.fastapi", "install_http_middleware"),
}

__all__ = [
    "DEFAULT_MATCHER",
    "Stage",
    "EdgeStage",
    "generate_trace_context",
    *_LAZY_IMPORTS,
]


def __getattr__(name):
    try:
        module, attr = _LAZY_IMPORTS[name]
    except KeyError:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from None
    value = getattr(importlib.import_module(module), attr)
    globals()[name] = value
    return value
