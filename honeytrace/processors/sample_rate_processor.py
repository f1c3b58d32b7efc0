"""Span processor that stamps the applied sample rate on every span."""

from __future__ import annotations

from typing import Optional

from opentelemetry.context import Context
from opentelemetry.sdk.trace import Span as SDKSpan
from opentelemetry.sdk.trace import SpanProcessor

from honeytrace.processors.sampler import SAMPLE_RATE_ATTRIBUTE, DeterministicSampler


class SampleRateSpanProcessor(SpanProcessor):
    """
    Copies the configured sample rate onto recording spans.

    The SDK only applies sampler attributes to the span that consulted the
    sampler, i.e. the root. Child spans get the rate here so each exported
    event can be weighted on its own.
    """

    def __init__(self, sample_rate: int) -> None:
        # validates the rate the same way the sampler does
        self.sample_rate = DeterministicSampler(sample_rate).sample_rate

    def on_start(self, span: SDKSpan, parent_context: Optional[Context] = None) -> None:
        if not span.is_recording():
            return
        attributes = span.attributes or {}
        if SAMPLE_RATE_ATTRIBUTE not in attributes:
            span.set_attribute(SAMPLE_RATE_ATTRIBUTE, self.sample_rate)

    def on_end(self, span) -> None:
        return None

    def shutdown(self) -> None:
        return None

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
