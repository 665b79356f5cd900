"""Error types for user resolution."""

from __future__ import annotations


class UserResolutionError(Exception):
    """Base exception for user resolution errors."""
    pass


class NotConfiguredError(UserResolutionError):
    """Raised when an operation runs before configure() was called."""

    def __init__(self, message: str = "user-resolution: call configure() before use"):
        super().__init__(message)


class SourceUnavailableError(UserResolutionError):
    """Raised (and recovered) when an injected lookup fails.

    Never escapes a public operation: the tier that hit it is treated as a miss.
    """

    def __init__(self, tier: str, message: str):
        super().__init__(message)
        self.tier = tier
