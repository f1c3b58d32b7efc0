"""Span exporter translating finished spans into flat events."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, TYPE_CHECKING

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

from honeytrace.errors import ExportError, InvalidConfigurationError
from honeytrace.exporter import attribute_names
from honeytrace.exporter.client import EventClient
from honeytrace.exporter.event import Event
from honeytrace.processors.sampler import SAMPLE_RATE_ATTRIBUTE
from honeytrace.utils.helpers import (
    format_span_id,
    format_trace_id,
    get_duration_ms,
    millis_to_datetime,
    nanos_to_millis,
)

if TYPE_CHECKING:
    from honeytrace.exporter.builder import SpanExporterBuilder

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, bool, int, float)


def _add_attribute_as_field(event: Event, key: str, value: Any) -> None:
    if isinstance(value, _SCALAR_TYPES):
        event.add_field(key, value)
    elif isinstance(value, (list, tuple)):
        event.add_field(key, list(value))


def create_event(client: EventClient, service_name: str, span: ReadableSpan) -> Event:
    """
    Build the event for one finished span.

    Span attributes are added before resource attributes, so a resource
    attribute wins on a name clash.
    """
    start_ms = nanos_to_millis(span.start_time or 0)
    context = span.get_span_context()

    event = client.create_event()
    event.set_timestamp(millis_to_datetime(start_ms))
    event.add_field(attribute_names.SERVICE_NAME_FIELD, service_name)
    event.add_field(attribute_names.TRACE_ID_FIELD, format_trace_id(context.trace_id))
    event.add_field(attribute_names.SPAN_ID_FIELD, format_span_id(context.span_id))
    event.add_field(
        attribute_names.DURATION_FIELD,
        get_duration_ms(span.start_time or 0, span.end_time),
    )

    if span.name:
        event.add_field(attribute_names.SPAN_NAME_FIELD, span.name)
    if span.parent is not None and span.parent.is_valid:
        event.add_field(attribute_names.PARENT_ID_FIELD, format_span_id(span.parent.span_id))
    if span.kind is not None:
        event.add_field(attribute_names.TYPE_FIELD, span.kind.name)

    attributes = span.attributes or {}
    for key, value in attributes.items():
        _add_attribute_as_field(event, key, value)

    if span.resource is not None:
        for key, value in span.resource.attributes.items():
            _add_attribute_as_field(event, key, value)

    sample_rate = attributes.get(SAMPLE_RATE_ATTRIBUTE)
    if isinstance(sample_rate, int) and not isinstance(sample_rate, bool) and sample_rate > 0:
        event.sample_rate = sample_rate

    return event


class EventSpanExporter(SpanExporter):
    """
    Sends one pre-sampled event per span through an ``EventClient``.

    Spans reaching the exporter were already kept by the sampler, so events
    are never sampled again on the way out.
    """

    def __init__(self, client: Optional[EventClient], service_name: Optional[str]) -> None:
        if client is None:
            raise InvalidConfigurationError("an event client is required")
        if not service_name:
            raise InvalidConfigurationError("service_name must be a non-empty string")
        self.client = client
        self.service_name = service_name

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        try:
            for span in spans:
                create_event(self.client, self.service_name, span).send_presampled()
        except ExportError:
            logger.error("Failed to export spans", exc_info=True)
            return SpanExportResult.FAILURE
        return SpanExportResult.SUCCESS

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        self.client.flush()
        return True

    def shutdown(self) -> None:
        self.client.close()

    @staticmethod
    def new_builder(service_name: str) -> "SpanExporterBuilder":
        from honeytrace.exporter.builder import SpanExporterBuilder
        return SpanExporterBuilder(service_name)
