"""Exporters translating spans into flat events."""

from honeytrace.exporter.builder import SpanExporterBuilder
from honeytrace.exporter.client import ConsoleEventClient, EventClient, InMemoryEventClient
from honeytrace.exporter.event import Event
from honeytrace.exporter.span_exporter import EventSpanExporter, create_event

__all__ = [
    "ConsoleEventClient",
    "Event",
    "EventClient",
    "EventSpanExporter",
    "InMemoryEventClient",
    "SpanExporterBuilder",
    "create_event",
]
