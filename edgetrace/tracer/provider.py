"""TracerProvider using OpenTelemetry SDK."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from opentelemetry.sdk.resources import Resource as OTelResource
from opentelemetry.sdk.trace import SpanProcessor as OTelSpanProcessor
from opentelemetry.sdk.trace import TracerProvider as OTelTracerProvider
from opentelemetry.sdk.trace.id_generator import IdGenerator

from edgetrace.tracer.id_generator import SecureIdGenerator


class TracerProvider:
    """
    TracerProvider for the full-capability stage.

    Wraps the OpenTelemetry SDK provider, which creates the server spans whose
    ids the reader reports. Span ids come from SecureIdGenerator unless an
    id_generator is given.
    """

    def __init__(
        self,
        resource: Optional[Dict[str, str]] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        """
        Initialize TracerProvider with OpenTelemetry.

        Args:
            resource: Resource attributes dictionary (converted to OTel Resource)
            id_generator: OTel IdGenerator, SecureIdGenerator by default
        """
        otel_resource = OTelResource.create(resource or {})
        self.id_generator = id_generator or SecureIdGenerator()
        self._otel_provider = OTelTracerProvider(
            resource=otel_resource,
            id_generator=self.id_generator,
        )
        self.resource = resource or {}

        # Tracers cache
        self._tracers: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get_tracer(self, name: str) -> "Tracer":
        """
        Get a tracer by name.

        Args:
            name: Instrumentation scope name

        Returns:
            edgetrace Tracer instance (wraps OTel Tracer)
        """
        with self._lock:
            tracer = self._tracers.get(name)
            if tracer is None:
                from edgetrace.tracer.tracer import Tracer
                tracer = Tracer(self, name)
                self._tracers[name] = tracer
            return tracer

    def add_span_processor(self, processor: OTelSpanProcessor) -> None:
        """Add an OpenTelemetry span processor."""
        self._otel_provider.add_span_processor(processor)

    def force_flush(self, timeout: Optional[float] = None) -> bool:
        """Force flush all processors."""
        return self._otel_provider.force_flush(
            timeout_millis=int(timeout * 1000) if timeout else 30000
        )

    def shutdown(self) -> None:
        """Shutdown the provider and all processors."""
        self._otel_provider.shutdown()

    @property
    def otel_provider(self) -> OTelTracerProvider:
        """Get the underlying OpenTelemetry TracerProvider."""
        return self._otel_provider
