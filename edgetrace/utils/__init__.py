"""Utility functions for edgetrace."""

from edgetrace.utils.helpers import (
    to_hex,
    format_trace_id,
    format_span_id,
    parse_trace_id,
    parse_span_id,
)
from edgetrace.utils.random_source import RandomSource, SecretsRandomSource, random_id

__all__ = [
    "to_hex",
    "format_trace_id",
    "format_span_id",
    "parse_trace_id",
    "parse_span_id",
    "RandomSource",
    "SecretsRandomSource",
    "random_id",
]
