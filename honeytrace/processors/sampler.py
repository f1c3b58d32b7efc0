"""Deterministic sampling decisions for traces.

Every producer that evaluates the same key with the same sample rate reaches
the same decision, without sharing state or talking to other producers. The
decision is a pure function of ``(sample_rate, key)``:

* ``sample_rate == 0`` drops everything,
* ``sample_rate == 1`` keeps everything,
* otherwise a key is kept when ``sampling_hash(key) % sample_rate == 0``.

The hash is part of the public contract. Any reimplementation, in any
language, must hash the UTF-8 bytes of the key with CRC-32 (IEEE 802.3
polynomial, the one used by zlib, gzip and PNG) and read the result as an
unsigned 32-bit integer. Changing it changes which historical traces are
kept, so a change must bump ``HASH_VERSION``.

The modulo scheme is not monotonic across rates: a key kept at rate N may
be dropped at a smaller rate M.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import Dict

from honeytrace.errors import InvalidConfigurationError

SAMPLE_RATE_ATTRIBUTE = "sample.rate"

HASH_ALGORITHM = "crc32"
HASH_VERSION = 1

_UINT32_MASK = 0xFFFFFFFF


def sampling_hash(key: str) -> int:
    """Return the unsigned 32-bit CRC-32 of the key's UTF-8 bytes."""
    # surrogatepass keeps lone surrogates hashable instead of raising
    data = key.encode("utf-8", "surrogatepass")
    return zlib.crc32(data) & _UINT32_MASK


@dataclass(frozen=True)
class SamplingDecision:
    kept: bool
    applied_rate: int

    def to_attributes(self) -> Dict[str, int]:
        """Metadata to attach to kept telemetry for un-biasing counts."""
        if not self.kept:
            return {}
        return {SAMPLE_RATE_ATTRIBUTE: self.applied_rate}


class DeterministicSampler:
    """
    Coordination-free sampler keeping roughly 1 in ``sample_rate`` keys.

    The instance holds nothing but its rate, so ``decide`` can be called
    from any number of threads without locking.
    """

    def __init__(self, sample_rate: int) -> None:
        # bool is an int subclass but never a meaningful rate
        if isinstance(sample_rate, bool) or not isinstance(sample_rate, int):
            raise InvalidConfigurationError(
                "sample_rate must be an integer",
                {"sample_rate": sample_rate},
            )
        if sample_rate < 0:
            raise InvalidConfigurationError(
                "sample_rate must be greater than or equal to 0",
                {"sample_rate": sample_rate},
            )
        self._sample_rate = sample_rate

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def decide(self, key: str) -> SamplingDecision:
        rate = self._sample_rate
        if rate == 0:
            return SamplingDecision(kept=False, applied_rate=0)
        if rate == 1:
            return SamplingDecision(kept=True, applied_rate=1)
        return SamplingDecision(
            kept=sampling_hash(key) % rate == 0,
            applied_rate=rate,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeterministicSampler):
            return NotImplemented
        return self._sample_rate == other._sample_rate

    def __hash__(self) -> int:
        return hash((DeterministicSampler, self._sample_rate))

    def __repr__(self) -> str:
        return f"DeterministicSampler(sample_rate={self._sample_rate})"
