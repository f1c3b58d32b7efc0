"""OpenTelemetry sampler backed by the deterministic sampler."""

from __future__ import annotations

from typing import Optional, Sequence

from opentelemetry.context import Context
from opentelemetry.sdk.trace.sampling import Decision, ParentBased, Sampler, SamplingResult
from opentelemetry.trace import Link, SpanKind, get_current_span
from opentelemetry.trace.span import TraceState
from opentelemetry.util.types import Attributes

from honeytrace.processors.sampler import DeterministicSampler
from honeytrace.processors.sampling_key import derive_sampling_key


def _parent_trace_state(parent_context: Optional[Context]) -> Optional[TraceState]:
    parent_span_context = get_current_span(parent_context).get_span_context()
    if parent_span_context is None or not parent_span_context.is_valid:
        return None
    return parent_span_context.trace_state


class DeterministicTraceSampler(Sampler):
    """
    Keeps about 1 in ``sample_rate`` traces, keyed on the trace id.

    Kept spans carry a ``sample.rate`` attribute so the backend can weight
    them. When ``key_attribute`` names a string attribute present on the
    span, its value is used as the key instead of the trace id.
    """

    def __init__(self, sample_rate: int, key_attribute: Optional[str] = None) -> None:
        self._sampler = DeterministicSampler(sample_rate)
        self.key_attribute = key_attribute

    @property
    def sample_rate(self) -> int:
        return self._sampler.sample_rate

    def should_sample(
        self,
        parent_context: Optional[Context],
        trace_id: int,
        name: str,
        kind: SpanKind = None,
        attributes: Attributes = None,
        links: Sequence[Link] = None,
        trace_state: TraceState = None,
    ) -> SamplingResult:
        key = derive_sampling_key(trace_id, attributes, self.key_attribute)
        decision = self._sampler.decide(key)
        if trace_state is None:
            trace_state = _parent_trace_state(parent_context)
        if not decision.kept:
            return SamplingResult(Decision.DROP, None, trace_state)
        return SamplingResult(
            Decision.RECORD_AND_SAMPLE,
            decision.to_attributes(),
            trace_state,
        )

    def get_description(self) -> str:
        return f"DeterministicSampler{{{self.sample_rate}}}"


def parent_based_sampler(sample_rate: int, key_attribute: Optional[str] = None) -> ParentBased:
    """
    Sampler that decides once per trace.

    Root spans consult the deterministic sampler; every descendant, local
    or remote, inherits its parent's sampled flag.
    """
    return ParentBased(root=DeterministicTraceSampler(sample_rate, key_attribute))
