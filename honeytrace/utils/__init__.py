"""Utility functions for Honeytrace."""

from honeytrace.utils.helpers import (
    format_trace_id,
    format_span_id,
    get_duration_ms,
    millis_to_datetime,
    nanos_to_millis,
)

__all__ = [
    "format_trace_id",
    "format_span_id",
    "get_duration_ms",
    "millis_to_datetime",
    "nanos_to_millis",
]
