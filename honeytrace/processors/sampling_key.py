"""Selection of the string that identifies a trace for sampling."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from honeytrace.errors import ValidationError
from honeytrace.utils.helpers import format_trace_id


def derive_sampling_key(
    trace_id: Union[int, str, None],
    attributes: Optional[Mapping[str, Any]] = None,
    key_attribute: Optional[str] = None,
) -> str:
    """
    Return the sampling key for a trace.

    Keys are opaque: string identifiers are passed through untouched, never
    parsed, so request ids such as ``1-5ababc0a-4df707925c1681932ea22a20``
    and random 128-bit ids are hashed over their raw characters alike.

    Args:
        trace_id: OTel integer trace id, or a caller-supplied trace id string
        attributes: Attributes of the root span, if any
        key_attribute: Name of a string attribute that overrides the trace id

    Returns:
        The key to hand to ``DeterministicSampler.decide``

    Raises:
        ValidationError: if no usable identifier is supplied
    """
    if key_attribute and attributes:
        value = attributes.get(key_attribute)
        if isinstance(value, str):
            return value

    if trace_id is None:
        raise ValidationError("a trace id is required to derive a sampling key")
    if isinstance(trace_id, str):
        return trace_id
    return format_trace_id(trace_id)
