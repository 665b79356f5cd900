"""
User Resolution - identity lookup by handle across ranked sources.

Resolves a handle against, in order:
- The authoritative account store (database / auth system)
- Content-derived profiles (markdown or other content sources), cached
- A fixed development admin when running without auth
"""

__version__ = "0.1.0"

from .cache.profile import ProfileCache
from .config import Config
from .errors import NotConfiguredError, SourceUnavailableError, UserResolutionError
from .identity import IdentitySource, ResolvedIdentity
from .models import AccountRecord, ProfileMetadata, ProfileRecord, SocialLinks
from .resolver import (
    UserResolver,
    clear_user_resolution_cache,
    configure,
    get_all_user_handles,
    get_config,
    reset_config,
    resolve_user,
    user_exists,
)
from .routes import RESERVED_ROUTES, is_reserved_route
from .sources import SourceConfig, SourceConfigHolder

__all__ = [
    "AccountRecord",
    "Config",
    "IdentitySource",
    "NotConfiguredError",
    "ProfileCache",
    "ProfileMetadata",
    "ProfileRecord",
    "RESERVED_ROUTES",
    "ResolvedIdentity",
    "SocialLinks",
    "SourceConfig",
    "SourceConfigHolder",
    "SourceUnavailableError",
    "UserResolutionError",
    "UserResolver",
    "clear_user_resolution_cache",
    "configure",
    "get_all_user_handles",
    "get_config",
    "is_reserved_route",
    "reset_config",
    "resolve_user",
    "user_exists",
]
