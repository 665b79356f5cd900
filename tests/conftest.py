"""Shared test fixtures for user resolution tests.

Sources are in-memory fakes that count calls, and the profile cache runs on
a fake clock so TTL behaviour can be driven step by step.
"""

from __future__ import annotations

import pytest

from user_resolution.cache.profile import ProfileCache
from user_resolution.resolver import UserResolver

from .fakes import FakeClock, FakeSources


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> ProfileCache:
    return ProfileCache(ttl_seconds=60.0, clock=clock)


@pytest.fixture
def sources() -> FakeSources:
    return FakeSources()


@pytest.fixture
def resolver(cache, sources) -> UserResolver:
    """Resolver wired to the fake sources, auth enabled (no noauth admin)."""
    resolver = UserResolver(cache=cache)
    resolver.configure(sources.config())
    return resolver
