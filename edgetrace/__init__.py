"""edgetrace: W3C trace context handoff from an edge stage to an instrumented server.

Only the errors are imported eagerly. Everything else resolves on first
attribute access, so ``import edgetrace.instrumentation.edge`` never loads
OpenTelemetry.
"""

import importlib

from edgetrace.errors import (
    ConfigError,
    EdgeTraceError,
    InvalidFormatError,
    RandomSourceUnavailableError,
)

__version__ = "0.1.0"

# public name -> defining module
_LAZY_IMPORTS = {
    "init": "edgetrace.auto",
    "stop_tracing": "edgetrace.auto",
    "get_tracer": "edgetrace.auto",
    "get_tracer_provider": "edgetrace.auto",
    "edge_stage": "edgetrace.auto",
    "server_stage": "edgetrace.auto",
    "get_ids": "edgetrace.context",
    "get_current_context": "edgetrace.context",
    "format_traceparent": "edgetrace.context",
    "parse_traceparent": "edgetrace.context",
    "inject_traceparent": "edgetrace.context",
    "extract_traceparent": "edgetrace.context",
    "generate_trace_context": "edgetrace.instrumentation",
    "Stage": "edgetrace.instrumentation",
    "EdgeStage": "edgetrace.instrumentation",
    "ServerStage": "edgetrace.instrumentation",
    "install_http_middleware": "edgetrace.instrumentation",
    "inject_http_headers": "edgetrace.instrumentation",
    "TraceContext": "edgetrace.tracer",
    "TraceIds": "edgetrace.tracer",
}

__all__ = [
    "__version__",
    "EdgeTraceError",
    "ConfigError",
    "InvalidFormatError",
    "RandomSourceUnavailableError",
    *_LAZY_IMPORTS,
]


def __getattr__(name):
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(importlib.import_module(module), name)
    globals()[name] = value
    return value
