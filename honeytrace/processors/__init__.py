"""Sampling and span processors."""

from honeytrace.processors.otel_sampler import DeterministicTraceSampler, parent_based_sampler
from honeytrace.processors.sample_rate_processor import SampleRateSpanProcessor
from honeytrace.processors.sampler import (
    HASH_ALGORITHM,
    HASH_VERSION,
    SAMPLE_RATE_ATTRIBUTE,
    DeterministicSampler,
    SamplingDecision,
    sampling_hash,
)
from honeytrace.processors.sampling_key import derive_sampling_key

__all__ = [
    "DeterministicSampler",
    "DeterministicTraceSampler",
    "HASH_ALGORITHM",
    "HASH_VERSION",
    "SAMPLE_RATE_ATTRIBUTE",
    "SampleRateSpanProcessor",
    "SamplingDecision",
    "derive_sampling_key",
    "parent_based_sampler",
    "sampling_hash",
]
