"""Honeytrace error hierarchy and exceptions."""

from __future__ import annotations


class HoneytraceError(Exception):
    """Base exception for all Honeytrace errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(HoneytraceError):
    """Raised when configuration is invalid or cannot be read."""
    pass


class InvalidConfigurationError(ConfigError):
    """
    Raised when a component is constructed with an unusable setting.

    This is a programming or deployment error: it is raised synchronously
    and must not be retried.
    """
    pass


class ValidationError(HoneytraceError):
    """Raised when runtime input fails validation."""
    pass


class ExportError(HoneytraceError):
    """Raised when an event client fails to deliver events."""
    pass
