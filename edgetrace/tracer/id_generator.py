"""OpenTelemetry id generator backed by the shared random source."""

from __future__ import annotations

from typing import Optional

from opentelemetry.sdk.trace.id_generator import IdGenerator

from edgetrace.utils.random_source import (
    SPAN_ID_BYTES,
    TRACE_ID_BYTES,
    RandomSource,
    SecretsRandomSource,
    random_id,
)


class SecureIdGenerator(IdGenerator):
    """
    OpenTelemetry IdGenerator backed by a RandomSource.

    The SDK's default generator uses the random module; server spans use this
    one so both stages draw ids from the same kind of source.
    """

    def __init__(self, source: Optional[RandomSource] = None) -> None:
        self._source = source or SecretsRandomSource()

    def generate_span_id(self) -> int:
        return int.from_bytes(random_id(self._source, SPAN_ID_BYTES), "big")

    def generate_trace_id(self) -> int:
        return int.from_bytes(random_id(self._source, TRACE_ID_BYTES), "big")
