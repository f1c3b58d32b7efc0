"""Event clients: the seam between span translation and delivery.

A client stamps dataset and global fields on new events and accepts sent
events. Network delivery is left to transport implementations of
``EventClient._send``; this module ships a console client for developer
visibility and an in-memory client for tests.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from honeytrace.errors import ExportError
from honeytrace.exporter.event import Event

logger = logging.getLogger(__name__)

DEFAULT_API_HOST = "https://api.honeycomb.io"


class EventClient:
    """Base client creating events and handing sent ones to a transport."""

    def __init__(
        self,
        *,
        dataset: Optional[str] = None,
        write_key: Optional[str] = None,
        api_host: str = DEFAULT_API_HOST,
        global_fields: Optional[Mapping[str, Any]] = None,
        dynamic_fields: Optional[Mapping[str, Callable[[], Any]]] = None,
        debug: bool = False,
    ) -> None:
        self.dataset = dataset
        self.write_key = write_key
        self.api_host = api_host
        self.global_fields: Dict[str, Any] = dict(global_fields or {})
        self.dynamic_fields: Dict[str, Callable[[], Any]] = dict(dynamic_fields or {})
        self.debug = debug
        self._closed = False

    def create_event(self) -> Event:
        """
        Create an event pre-populated with global and dynamic fields.

        Raises:
            ExportError: if a dynamic field supplier fails
        """
        event = Event(dataset=self.dataset, client=self)
        event.add(self.global_fields)
        for name, supplier in self.dynamic_fields.items():
            try:
                value = supplier()
            except Exception as exc:
                raise ExportError("dynamic field supplier failed", {"field": name, "error": exc}) from exc
            event.add_field(name, value)
        return event

    def send_presampled(self, event: Event) -> None:
        if self._closed:
            raise ExportError("event client is closed")
        if self.debug:
            logger.debug("Sending event: %s", event.to_dict())
        self._send(event)

    def flush(self) -> None:
        return None

    def close(self) -> None:
        if self._closed:
            return
        self.flush()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def _send(self, event: Event) -> None:
        raise NotImplementedError


class ConsoleEventClient(EventClient):
    """Writes each event as one JSON document per line (stdout by default)."""

    def __init__(self, stream=None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.stream = stream or sys.stdout

    def _send(self, event: Event) -> None:
        try:
            print(json.dumps(event.to_dict(), default=str), file=self.stream)
        except (OSError, ValueError) as exc:
            raise ExportError("failed to write event", {"error": exc}) from exc

    def flush(self) -> None:
        if not getattr(self.stream, "closed", False):
            self.stream.flush()


class InMemoryEventClient(EventClient):
    """Keeps sent events in memory."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._events: List[Event] = []
        self._lock = threading.Lock()

    def _send(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)

    def get_sent_events(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
