"""Fluent builder for ``EventSpanExporter``."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TextIO
from urllib.parse import urlparse

from honeytrace.errors import InvalidConfigurationError
from honeytrace.exporter.client import DEFAULT_API_HOST, ConsoleEventClient, EventClient
from honeytrace.exporter.span_exporter import EventSpanExporter


class SpanExporterBuilder:
    """
    Collects exporter settings and builds an ``EventSpanExporter``.

    Example::

        exporter = (
            SpanExporterBuilder("checkout")
            .dataset("checkout-traces")
            .write_key("...")
            .add_global_field("env", "prod")
            .build()
        )

    Unless a client is supplied with ``client()``, the exporter writes
    events to the console.
    """

    def __init__(self, service_name: str) -> None:
        if not service_name:
            raise InvalidConfigurationError("service_name must be a non-empty string")
        self.service_name = service_name
        self._dataset: Optional[str] = None
        self._write_key: Optional[str] = None
        self._api_host: str = DEFAULT_API_HOST
        self._debug = False
        self._global_fields: Dict[str, Any] = {}
        self._dynamic_fields: Dict[str, Callable[[], Any]] = {}
        self._stream: Optional[TextIO] = None
        self._client: Optional[EventClient] = None

    def add_global_field(self, name: str, value: Any) -> "SpanExporterBuilder":
        self._global_fields[name] = value
        return self

    def add_global_dynamic_field(self, name: str, supplier: Callable[[], Any]) -> "SpanExporterBuilder":
        """Add a field whose value is computed each time an event is created."""
        if not callable(supplier):
            raise InvalidConfigurationError(
                "dynamic field supplier must be callable", {"field": name}
            )
        self._dynamic_fields[name] = supplier
        return self

    def dataset(self, dataset: str) -> "SpanExporterBuilder":
        self._dataset = dataset
        return self

    def api_host(self, api_host: str) -> "SpanExporterBuilder":
        parsed = urlparse(api_host or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidConfigurationError(
                "api_host must be an absolute http(s) URL", {"api_host": api_host}
            )
        self._api_host = api_host
        return self

    def write_key(self, write_key: str) -> "SpanExporterBuilder":
        self._write_key = write_key
        return self

    def debug(self, enabled: bool) -> "SpanExporterBuilder":
        self._debug = enabled
        return self

    def stream(self, stream: TextIO) -> "SpanExporterBuilder":
        self._stream = stream
        return self

    def client(self, client: EventClient) -> "SpanExporterBuilder":
        """Use an existing client; the other client settings are then ignored."""
        self._client = client
        return self

    def build(self) -> EventSpanExporter:
        client = self._client
        if client is None:
            client = ConsoleEventClient(
                stream=self._stream,
                dataset=self._dataset,
                write_key=self._write_key,
                api_host=self._api_host,
                global_fields=self._global_fields,
                dynamic_fields=self._dynamic_fields,
                debug=self._debug,
            )
        return EventSpanExporter(client, self.service_name)
