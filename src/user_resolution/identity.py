"""Resolved identity - the single shape every source is normalized into."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .models import AccountRecord, ProfileRecord


class IdentitySource(str, Enum):
    """Where a resolved identity came from."""
    DATABASE = "database"
    PROFILE = "profile"
    NOAUTH = "noauth"


# Role given to profile-only users that do not declare one
DEFAULT_PROFILE_ROLE = "member"

# Development admin served when auth is disabled
NOAUTH_ADMIN_ID = "noauth-admin"
NOAUTH_ADMIN_HANDLE = "admin"
NOAUTH_ADMIN_DISPLAY_NAME = "Development Admin"
NOAUTH_ADMIN_ROLE = "super_admin"
NOAUTH_ADMIN_AVATAR = "/avatars/dev-admin.svg"
NOAUTH_ADMIN_BIO = "Local development super admin account"


@dataclass(frozen=True, slots=True)
class ResolvedIdentity:
    """
    Resolved user data from the account store, a profile, or the noauth fallback.

    ``id`` is set for database and noauth identities only; ``account`` is set
    for database identities only and is the exact record the store returned.
    """
    handle: str
    display_name: str
    source: IdentitySource
    role: str

    id: str | None = None

    avatar: str | None = None
    bio: str | None = None
    pronouns: str | None = None
    location: str | None = None
    website: str | None = None

    # Original store record (database source only)
    account: AccountRecord | None = None

    @classmethod
    def from_account(cls, account: AccountRecord) -> ResolvedIdentity:
        return cls(
            handle=account.handle,
            display_name=account.display_name,
            source=IdentitySource.DATABASE,
            role=account.role,
            id=account.id,
            avatar=account.avatar,
            bio=account.bio,
            pronouns=account.pronouns,
            location=account.location,
            website=account.website,
            account=account,
        )

    @classmethod
    def from_profile(cls, profile: ProfileRecord) -> ResolvedIdentity:
        """
        Normalize a profile record.

        Only the known metadata fields are read; any extra keys on the
        profile or its metadata are dropped.
        """
        metadata = profile.metadata
        social_website = metadata.social.website if metadata.social else None

        return cls(
            handle=metadata.handle or profile.slug,
            display_name=metadata.name or metadata.display_name or profile.slug,
            source=IdentitySource.PROFILE,
            role=metadata.role or DEFAULT_PROFILE_ROLE,
            avatar=metadata.avatar,
            bio=metadata.bio,
            pronouns=metadata.pronouns,
            location=metadata.location,
            website=metadata.website or social_website,
        )

    @classmethod
    def noauth_admin(cls) -> ResolvedIdentity:
        return cls(
            handle=NOAUTH_ADMIN_HANDLE,
            display_name=NOAUTH_ADMIN_DISPLAY_NAME,
            source=IdentitySource.NOAUTH,
            role=NOAUTH_ADMIN_ROLE,
            id=NOAUTH_ADMIN_ID,
            avatar=NOAUTH_ADMIN_AVATAR,
            bio=NOAUTH_ADMIN_BIO,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization (without the store record)."""
        data: dict[str, Any] = {
            "handle": self.handle,
            "display_name": self.display_name,
            "source": self.source.value,
            "role": self.role,
            "avatar": self.avatar,
            "bio": self.bio,
            "pronouns": self.pronouns,
            "location": self.location,
            "website": self.website,
        }
        if self.id is not None:
            data["id"] = self.id
        return data
