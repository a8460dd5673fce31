"""Helper functions for converting between id representations."""

from __future__ import annotations


def to_hex(buffer: bytes) -> str:
    """
    Encode raw bytes as lowercase hex, two characters per byte.

    Args:
        buffer: Raw id bytes

    Returns:
        Lowercase hex string of length 2 * len(buffer)
    """
    return buffer.hex()


def format_trace_id(trace_id: int) -> str:
    """
    Format OTel trace_id (int) to hex string.

    Args:
        trace_id: OTel trace_id as a 128-bit int

    Returns:
        32-character hex string
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format OTel span_id (int) to hex string.

    Args:
        span_id: OTel span_id as a 64-bit int

    Returns:
        16-character hex string
    """
    return format(span_id, '016x')


def parse_trace_id(hex_string: str) -> int:
    """
    Parse hex string trace_id to OTel int.

    Args:
        hex_string: 32-character hex string

    Returns:
        OTel trace_id as int
    """
    if not hex_string:
        return 0
    return int(hex_string, 16)


def parse_span_id(hex_string: str) -> int:
    """
    Parse hex string span_id to OTel int.

    Args:
        hex_string: 16-character hex string

    Returns:
        OTel span_id as int
    """
    if not hex_string:
        return 0
    return int(hex_string, 16)
