"""edgetrace error hierarchy and exceptions."""

from __future__ import annotations


class EdgeTraceError(Exception):
    """Base exception for all edgetrace errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(EdgeTraceError):
    """Raised when configuration is invalid or conflicting."""
    pass


class InvalidFormatError(EdgeTraceError):
    """Raised when a traceparent value fails to decode."""
    pass


class RandomSourceUnavailableError(EdgeTraceError):
    """Raised when the cryptographic random source cannot produce bytes."""
    pass


class InitializationError(EdgeTraceError):
    """Raised when setup of the server stage fails."""
    pass
