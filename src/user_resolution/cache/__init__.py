"""Caching layer for profile-tier lookups."""

from .profile import KNOWN_ABSENT, PROFILE_CACHE_TTL_SECONDS, ProfileCache

__all__ = [
    "KNOWN_ABSENT",
    "PROFILE_CACHE_TTL_SECONDS",
    "ProfileCache",
]
