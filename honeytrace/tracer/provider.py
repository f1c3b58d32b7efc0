"""TracerProvider using OpenTelemetry SDK with deterministic sampling."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from opentelemetry.sdk.resources import Resource as OTelResource
from opentelemetry.sdk.trace import SpanProcessor as OTelSpanProcessor
from opentelemetry.sdk.trace import TracerProvider as OTelTracerProvider
from opentelemetry.sdk.trace.sampling import ParentBased
from opentelemetry.trace import Tracer

from honeytrace.processors.otel_sampler import DeterministicTraceSampler
from honeytrace.processors.sample_rate_processor import SampleRateSpanProcessor

logger = logging.getLogger(__name__)


class TracerProvider:
    """
    TracerProvider using OpenTelemetry SDK.

    The sampler is fixed at creation: OTel providers cannot swap samplers
    afterwards. Root spans are sampled deterministically from their trace
    id and children follow their parent, so a trace is decided exactly once.
    """

    def __init__(
        self,
        sample_rate: int = 1,
        resource: Optional[Dict[str, str]] = None,
        key_attribute: Optional[str] = None,
    ) -> None:
        """
        Initialize TracerProvider with OpenTelemetry.

        Args:
            sample_rate: Keep about 1 in sample_rate traces (0 keeps none)
            resource: Resource attributes dictionary (converted to OTel Resource)
            key_attribute: Root span attribute used as sampling key when present

        Raises:
            InvalidConfigurationError: if sample_rate is negative
        """
        self._sampler = DeterministicTraceSampler(sample_rate, key_attribute)
        otel_resource = OTelResource.create(resource or {})
        self._otel_provider = OTelTracerProvider(
            resource=otel_resource,
            sampler=ParentBased(root=self._sampler),
        )
        self._otel_provider.add_span_processor(SampleRateSpanProcessor(sample_rate))

        self.resource = resource or {}
        self._tracers: Dict[str, Tracer] = {}
        self._lock = threading.Lock()

    @property
    def sampler(self) -> DeterministicTraceSampler:
        return self._sampler

    @property
    def sample_rate(self) -> int:
        return self._sampler.sample_rate

    def get_tracer(self, name: str) -> Tracer:
        """
        Get a tracer by name.

        Args:
            name: Instrumentation scope name

        Returns:
            OTel Tracer bound to this provider
        """
        with self._lock:
            tracer = self._tracers.get(name)
            if tracer is None:
                tracer = self._otel_provider.get_tracer(name)
                self._tracers[name] = tracer
            return tracer

    def add_span_processor(self, processor: OTelSpanProcessor) -> None:
        self._otel_provider.add_span_processor(processor)

    def force_flush(self, timeout: Optional[float] = None) -> bool:
        """Force flush all processors."""
        return self._otel_provider.force_flush(
            timeout_millis=int(timeout * 1000) if timeout else 30000
        )

    def shutdown(self) -> None:
        """Shutdown the provider and all processors."""
        logger.debug("Shutting down tracer provider")
        self._otel_provider.shutdown()
