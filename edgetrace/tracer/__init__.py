"""Tracer components for the full-capability stage."""

import importlib

from edgetrace.tracer.trace_context import TraceContext, TraceIds

# SDK-backed classes, loaded on first use
_LAZY_IMPORTS = {
    "SecureIdGenerator": "edgetrace.tracer.id_generator",
    "TracerProvider": "edgetrace.tracer.provider",
    "Tracer": "edgetrace.tracer.tracer",
}

__all__ = [
    "SecureIdGenerator",
    "TraceContext",
    "TraceIds",
    "Tracer",
    "TracerProvider",
]


def __getattr__(name):
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(importlib.import_module(module), name)
    globals()[name] = value
    return value
