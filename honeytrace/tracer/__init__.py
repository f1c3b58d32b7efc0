"""Tracer components for Honeytrace."""

from honeytrace.tracer.provider import TracerProvider

__all__ = [
    "TracerProvider",
]
