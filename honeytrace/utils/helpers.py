"""Helper functions for OpenTelemetry compatibility."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

NANOS_PER_MILLI = 1_000_000


def format_trace_id(trace_id: int) -> str:
    """
    Format OTel trace_id (int128) to hex string.

    Args:
        trace_id: OTel trace_id as int

    Returns:
        32-character lowercase hex string
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format OTel span_id (int64) to hex string.

    Args:
        span_id: OTel span_id as int

    Returns:
        16-character lowercase hex string
    """
    return format(span_id, '016x')


def nanos_to_millis(nanos: int) -> int:
    """Truncate a nanosecond count to whole milliseconds."""
    return nanos // NANOS_PER_MILLI


def get_duration_ms(start_time: int, end_time: Optional[int]) -> int:
    """
    Span duration in whole milliseconds.

    The duration is clamped to at least one nanosecond before truncation,
    so unfinished or zero-length spans report 0.
    """
    if end_time is None:
        end_time = start_time
    return nanos_to_millis(max(1, end_time - start_time))


def millis_to_datetime(millis: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
