"""Honeytrace: deterministic trace sampling and span-to-event export for OpenTelemetry."""

from honeytrace.auto import get_tracer, get_tracer_provider, init, stop_tracing
from honeytrace.errors import (
    ConfigError,
    ExportError,
    HoneytraceError,
    InvalidConfigurationError,
    ValidationError,
)
from honeytrace.exporter import EventSpanExporter, SpanExporterBuilder
from honeytrace.processors import (
    DeterministicSampler,
    DeterministicTraceSampler,
    SamplingDecision,
    derive_sampling_key,
)
from honeytrace.tracer import TracerProvider

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DeterministicSampler",
    "DeterministicTraceSampler",
    "EventSpanExporter",
    "ExportError",
    "HoneytraceError",
    "InvalidConfigurationError",
    "SamplingDecision",
    "SpanExporterBuilder",
    "TracerProvider",
    "ValidationError",
    "__version__",
    "derive_sampling_key",
    "get_tracer",
    "get_tracer_provider",
    "init",
    "stop_tracing",
]
