"""Immutable trace metadata carried in the traceparent header."""

from dataclasses import dataclass
from typing import NamedTuple

SUPPORTED_VERSION = 0
SAMPLED_FLAG = 0x01

TRACE_ID_HEX_LEN = 32
SPAN_ID_HEX_LEN = 16

_HEX_DIGITS = frozenset("0123456789abcdef")


def _is_hex_id(value: str, length: int) -> bool:
    return (
        isinstance(value, str)
        and len(value) == length
        and set(value) <= _HEX_DIGITS
        and value.strip("0") != ""
    )


@dataclass(frozen=True)
class TraceContext:
    trace_id: str
    span_id: str
    flags: int = SAMPLED_FLAG  # bit 0 = sampled
    version: int = SUPPORTED_VERSION

    @property
    def sampled(self) -> bool:
        return bool(self.flags & SAMPLED_FLAG)

    def is_valid(self) -> bool:
        return (
            self.version == SUPPORTED_VERSION
            and 0 <= self.flags <= 0xFF
            and _is_hex_id(self.trace_id, TRACE_ID_HEX_LEN)
            and _is_hex_id(self.span_id, SPAN_ID_HEX_LEN)
        )


class TraceIds(NamedTuple):
    """Display pair of the identifiers in effect for the caller."""

    trace_id: str
    span_id: str

    @classmethod
    def absent(cls) -> "TraceIds":
        return cls("null", "null")

    @classmethod
    def of(cls, context: TraceContext) -> "TraceIds":
        return cls(context.trace_id, context.span_id)
