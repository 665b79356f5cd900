"""Core resolution service - handle to identity across ranked sources.

Resolution order, first match wins:
1. Account store (authenticated users take precedence)
2. Content profiles, through the profile cache
3. Development admin for "admin" when no_auth_mode is on

A failing source never fails the call. It is logged, reported to telemetry
and treated as a miss, so the next tier still gets its turn. The only error
a caller sees is NotConfiguredError.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from .cache.profile import ProfileCache
from .config import Config
from .errors import SourceUnavailableError
from .identity import NOAUTH_ADMIN_HANDLE, ResolvedIdentity
from .models import AccountRecord, ProfileRecord, coerce_account, coerce_profile
from .sources import SourceConfig, SourceConfigHolder
from .telemetry.emitter import TelemetryEmitter
from .telemetry.events import LookupEvent, LookupOutcome, Tier


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """Value-or-miss outcome of one guarded source call."""
    value: T | None = None
    error: SourceUnavailableError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class UserResolver:
    """
    Resolves handles to identities.

    Each resolver owns its source slot and profile cache, so independent
    resolvers (one per test, one per tenant) never share state.
    """
    cache: ProfileCache = field(default_factory=ProfileCache)
    telemetry: TelemetryEmitter | None = None
    sources: SourceConfigHolder = field(default_factory=SourceConfigHolder)

    @classmethod
    def from_config(
        cls,
        config: Config,
        telemetry: TelemetryEmitter | None = None,
    ) -> UserResolver:
        return cls(
            cache=ProfileCache(ttl_seconds=config.cache.ttl_seconds),
            telemetry=telemetry,
        )

    # -- configuration ------------------------------------------------------

    def configure(self, config: SourceConfig) -> None:
        """Install lookups. Does not clear the profile cache."""
        self.sources.configure(config)

    def get_config(self) -> SourceConfig:
        return self.sources.get()

    def reset(self) -> None:
        """Forget the configured sources."""
        self.sources.reset()

    def clear_cache(self) -> None:
        """Clear the profile cache. Useful for testing or after profile updates."""
        self.cache.clear()

    # -- operations ---------------------------------------------------------

    async def resolve(self, handle: str) -> ResolvedIdentity | None:
        """
        Resolve a user by handle.

        Returns None when no tier knows the handle, including when sources
        are down.
        """
        sources = self.sources.get()

        async def find_account() -> AccountRecord | None:
            record = await sources.find_user_by_handle(handle)
            return coerce_account(record) if record is not None else None

        stored = await self._guard(Tier.STORE, handle, "find_user_by_handle", find_account)
        if stored.failed:
            logger.warning(f"[UserResolution] Error checking database: {stored.error}")
        elif stored.value is not None:
            return ResolvedIdentity.from_account(stored.value)

        profile_user = await self._resolve_from_profile(sources, handle)
        if profile_user is not None:
            return profile_user

        if handle == NOAUTH_ADMIN_HANDLE and sources.no_auth_mode:
            self._emit(LookupEvent.create(Tier.FALLBACK, handle, "noauth_admin", LookupOutcome.HIT))
            return ResolvedIdentity.noauth_admin()

        return None

    async def exists(self, handle: str) -> bool:
        """True if any tier resolves the handle. Pays the full resolve cost."""
        return await self.resolve(handle) is not None

    async def list_all_handles(self) -> list[str]:
        """
        All handles known to the account store and the profile source.

        Deduplicated; order is first-seen (store, then profiles) but callers
        should not rely on it.
        """
        sources = self.sources.get()
        handles: dict[str, None] = {}

        async def find_all() -> list:
            return list(await sources.find_all_users())

        users = await self._guard(Tier.LISTING, None, "find_all_users", find_all)
        if users.failed:
            logger.warning(f"[UserResolution] Error getting database users: {users.error}")
        else:
            for user in self._valid_records(users.value or (), coerce_account, "find_all_users"):
                handles.setdefault(user.handle, None)

        async def load_all() -> list:
            return list(await sources.load_profiles({}))

        profiles = await self._guard(Tier.LISTING, None, "load_profiles", load_all)
        if profiles.failed:
            logger.warning(f"[UserResolution] Error getting profile users: {profiles.error}")
        else:
            for profile in self._valid_records(profiles.value or (), coerce_profile, "load_profiles"):
                handles.setdefault(profile.profile_handle, None)

        return list(handles)

    # -- internals ----------------------------------------------------------

    @staticmethod
    def _valid_records(
        records: Sequence,
        coerce: Callable[[object], T],
        source: str,
    ) -> list[T]:
        """Coerce records one by one, skipping any that fail validation."""
        valid = []
        for record in records:
            try:
                valid.append(coerce(record))
            except (TypeError, ValueError) as e:
                logger.warning(f"[UserResolution] Skipping invalid record from {source}: {e}")
        return valid

    async def _resolve_from_profile(
        self,
        sources: SourceConfig,
        handle: str,
    ) -> ResolvedIdentity | None:
        if self.cache.get(handle) is not None:
            self._emit(LookupEvent.create(Tier.PROFILE, handle, "profile_cache", LookupOutcome.CACHED))

        async def load(key: str) -> ResolvedIdentity | None:
            return await self._load_profile(sources, key)

        return await self.cache.lookup(handle, load)

    async def _load_profile(self, sources: SourceConfig, handle: str) -> ResolvedIdentity | None:
        async def load_first() -> list[ProfileRecord]:
            records = list(await sources.load_profiles({"handle": handle}))
            # Source order decides, only the first profile is used
            return [coerce_profile(records[0])] if records else []

        result = await self._guard(Tier.PROFILE, handle, "load_profiles", load_first)
        if result.failed:
            logger.error(f"[UserResolution] Error loading profile: {result.error}")
            return None

        if not result.value:
            return None

        return ResolvedIdentity.from_profile(result.value[0])

    async def _guard(
        self,
        tier: Tier,
        handle: str | None,
        source: str,
        call: Callable[[], Awaitable[T]],
    ) -> LookupResult[T]:
        """Run one external call, turning any failure into a recorded miss."""
        start = time.perf_counter()
        try:
            value = await call()
        except Exception as e:
            latency_ms = (time.perf_counter() - start) * 1000
            error = SourceUnavailableError(tier.value, f"{source} failed: {e}")
            error.__cause__ = e
            self._emit(LookupEvent.create(
                tier, handle, source, LookupOutcome.ERROR, latency_ms,
                error_message=str(e),
            ))
            return LookupResult(error=error)

        latency_ms = (time.perf_counter() - start) * 1000
        self._emit(LookupEvent.create(
            tier, handle, source,
            LookupOutcome.HIT if value else LookupOutcome.MISS,
            latency_ms,
            result_count=len(value) if isinstance(value, Sequence) else None,
        ))
        return LookupResult(value=value)

    def _emit(self, event: LookupEvent) -> None:
        if self.telemetry is not None:
            self.telemetry.emit(event)


# Default resolver behind the module-level API
_default_resolver = UserResolver()


def get_default_resolver() -> UserResolver:
    return _default_resolver


def configure(config: SourceConfig) -> None:
    """Configure the default resolver. Call once before any lookup."""
    _default_resolver.configure(config)


def get_config() -> SourceConfig:
    """Active SourceConfig of the default resolver; raises NotConfiguredError if unset."""
    return _default_resolver.get_config()


def reset_config() -> None:
    _default_resolver.reset()


async def resolve_user(handle: str) -> ResolvedIdentity | None:
    """Resolve a handle with the default resolver."""
    return await _default_resolver.resolve(handle)


async def user_exists(handle: str) -> bool:
    return await _default_resolver.exists(handle)


async def get_all_user_handles() -> list[str]:
    return await _default_resolver.list_all_handles()


def clear_user_resolution_cache() -> None:
    _default_resolver.clear_cache()
