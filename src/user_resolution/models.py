"""
Pydantic models for records handed in by external sources.

Account and profile records come from stores with varying schemas, so every
model keeps unknown keys (``extra="allow"``) instead of rejecting them.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AccountRecord(BaseModel):
    """User record from a database or external auth system."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Store-assigned user id")
    handle: str = Field(..., description="Unique handle (username)")
    display_name: str = Field(..., alias="displayName", description="Display name")
    role: str = Field(..., description="Role name in the auth system")
    avatar: Optional[str] = None
    bio: Optional[str] = None
    pronouns: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_numeric_id(cls, value: Any) -> Any:
        # SQL stores hand back integer primary keys
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SocialLinks(BaseModel):
    """Secondary contact links nested under profile metadata."""

    model_config = ConfigDict(extra="allow")

    website: Optional[str] = None


class ProfileMetadata(BaseModel):
    """Front matter of a content profile. Every field is optional."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    handle: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    role: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    pronouns: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    social: Optional[SocialLinks] = None


class ProfileRecord(BaseModel):
    """A profile loaded from markdown or another content source."""

    model_config = ConfigDict(extra="allow")

    slug: str = Field(..., description="Content-addressable key of the profile")
    metadata: ProfileMetadata = Field(default_factory=ProfileMetadata)

    @property
    def profile_handle(self) -> str:
        """Handle claimed by this profile, falling back to its slug."""
        return self.metadata.handle or self.slug


def coerce_account(record: AccountRecord | Mapping[str, Any]) -> AccountRecord:
    """Accept either a model or a plain mapping from the account store."""
    if isinstance(record, AccountRecord):
        return record
    return AccountRecord.model_validate(dict(record))


def coerce_profile(record: ProfileRecord | Mapping[str, Any]) -> ProfileRecord:
    """Accept either a model or a plain mapping from the profile source."""
    if isinstance(record, ProfileRecord):
        return record
    return ProfileRecord.model_validate(dict(record))
