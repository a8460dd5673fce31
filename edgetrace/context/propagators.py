"""W3C traceparent encoding and header propagation.

This module has no OpenTelemetry dependency so the edge stage can use it.
"""

from __future__ import annotations

import logging
from typing import Mapping, MutableMapping, Optional

from edgetrace.errors import InvalidFormatError
from edgetrace.tracer.trace_context import (
    SPAN_ID_HEX_LEN,
    SUPPORTED_VERSION,
    TRACE_ID_HEX_LEN,
    TraceContext,
)

logger = logging.getLogger("edgetrace.context")

TRACEPARENT_HEADER = "traceparent"

# version, trace-id, span-id, flags
_FIELD_LENGTHS = (2, TRACE_ID_HEX_LEN, SPAN_ID_HEX_LEN, 2)
_HEX_DIGITS = frozenset("0123456789abcdef")


def format_traceparent(context: TraceContext) -> str:
    """
    Format traceparent header value (W3C Trace Context).

    Raises:
        InvalidFormatError: if the context breaks an invariant
    """
    if not context.is_valid():
        raise InvalidFormatError(
            "Cannot encode invalid trace context",
            {"trace_id": context.trace_id, "span_id": context.span_id},
        )
    return f"{context.version:02x}-{context.trace_id}-{context.span_id}-{context.flags:02x}"


def parse_traceparent(header_value: str) -> TraceContext:
    """
    Parse a traceparent header value into a TraceContext.

    Raises:
        InvalidFormatError: on wrong shape, bad hex, unsupported version or a
            zero trace/span id
    """
    if not isinstance(header_value, str):
        raise InvalidFormatError("traceparent must be a string")

    fields = header_value.strip().split("-")
    if len(fields) != len(_FIELD_LENGTHS):
        raise InvalidFormatError(
            "traceparent must have exactly four fields", {"value": header_value}
        )

    for field, expected in zip(fields, _FIELD_LENGTHS):
        if len(field) != expected:
            raise InvalidFormatError(
                "traceparent field has wrong length",
                {"field": field, "expected": expected},
            )
        if not set(field) <= _HEX_DIGITS:
            raise InvalidFormatError(
                "traceparent field is not lowercase hex", {"field": field}
            )

    version_hex, trace_id, span_id, flags_hex = fields
    version = int(version_hex, 16)
    if version != SUPPORTED_VERSION:
        raise InvalidFormatError(
            "Unsupported traceparent version", {"version": version_hex}
        )
    if trace_id == "0" * TRACE_ID_HEX_LEN:
        raise InvalidFormatError("traceparent trace id is all zeros")
    if span_id == "0" * SPAN_ID_HEX_LEN:
        raise InvalidFormatError("traceparent span id is all zeros")

    return TraceContext(
        trace_id=trace_id,
        span_id=span_id,
        flags=int(flags_hex, 16),
        version=version,
    )


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def set_header(headers: MutableMapping[str, str], name: str, value: str) -> None:
    """Set a header, dropping any existing variant that differs only in case."""
    lowered = name.lower()
    for key in [k for k in headers if k.lower() == lowered]:
        del headers[key]
    headers[lowered] = value


def inject_traceparent(headers: MutableMapping[str, str], context: TraceContext) -> None:
    """Inject traceparent header into headers mapping."""
    set_header(headers, TRACEPARENT_HEADER, format_traceparent(context))


def extract_traceparent(headers: Mapping[str, str]) -> Optional[TraceContext]:
    """
    Extract traceparent header from headers and parse it.

    A missing or malformed header yields None so the caller starts a new trace.
    """
    value = get_header(headers, TRACEPARENT_HEADER)
    if value is None:
        return None
    try:
        return parse_traceparent(value)
    except InvalidFormatError as e:
        logger.debug(f"Ignoring incoming traceparent: {e}")
        return None
