"""Flat key/value event handed to an event client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from honeytrace.exporter.client import EventClient


@dataclass
class Event:
    """
    One row for a columnar backend.

    Events are created by an ``EventClient`` (which pre-populates global
    fields) and sent back through it with ``send_presampled``.
    """

    fields: Dict[str, Any] = field(default_factory=dict)
    timestamp: Optional[datetime] = None
    dataset: Optional[str] = None
    sample_rate: int = 1
    client: Optional["EventClient"] = field(default=None, repr=False, compare=False)

    def add_field(self, name: str, value: Any) -> "Event":
        self.fields[name] = value
        return self

    def add(self, data: Mapping[str, Any]) -> "Event":
        self.fields.update(data)
        return self

    def set_timestamp(self, timestamp: datetime) -> "Event":
        self.timestamp = timestamp
        return self

    def send_presampled(self) -> None:
        """Send without further client-side sampling."""
        if self.client is None:
            raise RuntimeError("event was not created by an EventClient")
        self.client.send_presampled(self)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "data": dict(self.fields),
            "samplerate": self.sample_rate,
        }
        if self.timestamp is not None:
            payload["time"] = self.timestamp.isoformat()
        if self.dataset:
            payload["dataset"] = self.dataset
        return payload
