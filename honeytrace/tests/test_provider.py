"""Tests for the TracerProvider wrapper."""

import pytest
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from honeytrace.errors import InvalidConfigurationError
from honeytrace.tracer.provider import TracerProvider


def test_tracers_are_cached_by_name():
    provider = TracerProvider()
    assert provider.get_tracer("a") is provider.get_tracer("a")
    assert provider.get_tracer("a") is not provider.get_tracer("b")


def test_negative_sample_rate_rejected():
    with pytest.raises(InvalidConfigurationError):
        TracerProvider(sample_rate=-3)


def test_resource_attributes_applied():
    provider = TracerProvider(resource={"service.name": "svc"})
    exporter = InMemorySpanExporter()
    provider.add_span_processor(SimpleSpanProcessor(exporter))

    with provider.get_tracer("test").start_as_current_span("op"):
        pass

    (span,) = exporter.get_finished_spans()
    assert span.resource.attributes["service.name"] == "svc"
    assert span.attributes["sample.rate"] == 1
    provider.shutdown()


def test_sampler_exposed():
    provider = TracerProvider(sample_rate=8, key_attribute="request.id")
    assert provider.sample_rate == 8
    assert provider.sampler.key_attribute == "request.id"
