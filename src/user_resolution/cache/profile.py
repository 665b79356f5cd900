"""Epoch-scoped cache for profile lookups."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ..identity import ResolvedIdentity


logger = logging.getLogger(__name__)

# Profiles rarely change, one minute is enough to absorb repeated lookups
PROFILE_CACHE_TTL_SECONDS = 60.0


class _KnownAbsent:
    """Marker for a handle the profile source was asked about and did not have."""

    _instance: _KnownAbsent | None = None

    def __new__(cls) -> _KnownAbsent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "KNOWN_ABSENT"

    def __bool__(self) -> bool:
        return False


KNOWN_ABSENT = _KnownAbsent()

CachedProfile = ResolvedIdentity | _KnownAbsent


@dataclass
class ProfileCache:
    """
    Cache of profile-tier results keyed by handle.

    All entries share one epoch. Once the epoch is older than the TTL the
    whole generation is thrown away on the next lookup, even entries that
    were written moments ago. Negative results are cached as KNOWN_ABSENT so
    a missing handle costs one profile query per epoch.
    """
    ttl_seconds: float = PROFILE_CACHE_TTL_SECONDS

    # Time source in seconds (tests inject a fake clock)
    clock: Callable[[], float] = time.time

    # Internal state
    _entries: dict[str, CachedProfile] = field(default_factory=dict, init=False)
    _epoch: float | None = field(default=None, init=False)

    # Stats
    _hits: int = field(default=0, init=False)
    _misses: int = field(default=0, init=False)
    _rebuilds: int = field(default=0, init=False)

    def get(self, handle: str) -> CachedProfile | None:
        """
        Return the cached value for a handle in the current epoch.

        None means "not looked up yet"; KNOWN_ABSENT means "looked up, not found".
        """
        if not self._is_fresh():
            return None
        return self._entries.get(handle)

    async def lookup(
        self,
        handle: str,
        loader: Callable[[str], Awaitable[ResolvedIdentity | None]],
    ) -> ResolvedIdentity | None:
        """
        Get from cache or load through ``loader`` on a miss.

        The loader returns None for "no profile"; it must not raise, failures
        are the caller's to translate into None first.
        """
        cached = self.get(handle)
        if cached is not None:
            self._hits += 1
            return cached if isinstance(cached, ResolvedIdentity) else None

        self._misses += 1
        if not self._is_fresh():
            self._rebuild()

        # Writes go to the generation that was current when the load began
        entries = self._entries
        resolved = await loader(handle)
        entries[handle] = resolved if resolved is not None else KNOWN_ABSENT
        return resolved

    def clear(self) -> None:
        """Discard the epoch and every entry. Safe to call at any time."""
        self._entries = {}
        self._epoch = None

    def _is_fresh(self) -> bool:
        return self._epoch is not None and (self.clock() - self._epoch) <= self.ttl_seconds

    def _rebuild(self) -> None:
        if self._epoch is not None:
            logger.debug(f"Profile cache expired, discarding {len(self._entries)} entries")
        self._entries = {}
        self._epoch = self.clock()
        self._rebuilds += 1

    @property
    def is_populated(self) -> bool:
        """True once an epoch has started and until it is cleared."""
        return self._epoch is not None

    @property
    def size(self) -> int:
        """Entries in the current generation, negative results included."""
        return len(self._entries)

    @property
    def stats(self) -> dict:
        """Cache statistics."""
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0

        return {
            "size": self.size,
            "hits": self._hits,
            "misses": self._misses,
            "rebuilds": self._rebuilds,
            "hit_rate_percent": round(hit_rate, 2),
        }
