"""Source configuration - the injected lookup capabilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Sequence

from .errors import NotConfiguredError
from .models import AccountRecord, ProfileRecord


logger = logging.getLogger(__name__)

AccountLike = AccountRecord | Mapping[str, Any]
ProfileLike = ProfileRecord | Mapping[str, Any]

# Filter passed to load_profiles: {"handle": "..."} or {} for all profiles
ProfileFilter = dict[str, str]

FindUserByHandle = Callable[[str], Awaitable[AccountLike | None]]
FindAllUsers = Callable[[], Awaitable[Sequence[AccountLike]]]
LoadProfiles = Callable[[ProfileFilter], Awaitable[Sequence[ProfileLike]]]


@dataclass(frozen=True)
class SourceConfig:
    """
    Lookup functions supplied by the host application.

    The store and profile source themselves live outside this package;
    resolution only ever talks to them through these callables.
    """
    find_user_by_handle: FindUserByHandle
    find_all_users: FindAllUsers
    load_profiles: LoadProfiles

    # Serve the development admin for "admin" when no tier matches
    no_auth_mode: bool = False


class SourceConfigHolder:
    """Write-then-read slot for the active SourceConfig."""

    def __init__(self) -> None:
        self._config: SourceConfig | None = None

    def configure(self, config: SourceConfig) -> None:
        """Install a capability set, replacing any previous one in full."""
        self._config = config
        logger.debug(f"Sources configured (no_auth_mode={config.no_auth_mode})")

    def get(self) -> SourceConfig:
        if self._config is None:
            raise NotConfiguredError()
        return self._config

    def reset(self) -> None:
        self._config = None

    @property
    def is_configured(self) -> bool:
        return self._config is not None
