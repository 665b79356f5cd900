"""Tests for record models and identity normalization."""

import pytest
from pydantic import ValidationError

from user_resolution.identity import IdentitySource, ResolvedIdentity
from user_resolution.models import AccountRecord, ProfileRecord, coerce_account, coerce_profile


class TestAccountRecord:
    def test_accepts_alias_and_field_name(self):
        by_alias = coerce_account({"id": "1", "handle": "a", "displayName": "A", "role": "member"})
        by_name = coerce_account({"id": "1", "handle": "a", "display_name": "A", "role": "member"})

        assert by_alias.display_name == by_name.display_name == "A"

    def test_keeps_unknown_fields(self):
        record = coerce_account({
            "id": "1", "handle": "a", "displayName": "A", "role": "member",
            "createdAt": "2024-01-01", "permissions": ["read"],
        })

        assert record.model_extra == {"createdAt": "2024-01-01", "permissions": ["read"]}

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            coerce_account({"handle": "a"})

    def test_integer_id_becomes_string(self):
        record = coerce_account({"id": 42, "handle": "a", "displayName": "A", "role": "member"})
        assert record.id == "42"

    def test_model_passes_through(self):
        record = AccountRecord(id="1", handle="a", display_name="A", role="member")
        assert coerce_account(record) is record


class TestProfileRecord:
    def test_metadata_defaults_to_empty(self):
        profile = coerce_profile({"slug": "bare"})

        assert profile.metadata.handle is None
        assert profile.profile_handle == "bare"

    def test_keeps_unknown_fields(self):
        profile = coerce_profile({
            "slug": "p",
            "body": "markdown",
            "metadata": {"tags": ["x"], "social": {"website": "https://w", "mastodon": "@p"}},
        })

        assert profile.model_extra == {"body": "markdown"}
        assert profile.metadata.model_extra == {"tags": ["x"]}
        assert profile.metadata.social.model_extra == {"mastodon": "@p"}


class TestResolvedIdentity:
    def test_from_profile_ignores_extras(self):
        profile = ProfileRecord.model_validate({
            "slug": "p",
            "metadata": {"displayName": "P", "tags": ["x"]},
        })

        identity = ResolvedIdentity.from_profile(profile)

        assert identity == ResolvedIdentity(
            handle="p",
            display_name="P",
            source=IdentitySource.PROFILE,
            role="member",
        )

    def test_empty_strings_fall_through(self):
        profile = coerce_profile({"slug": "p", "metadata": {"handle": "", "name": "", "role": ""}})

        identity = ResolvedIdentity.from_profile(profile)

        assert identity.handle == "p"
        assert identity.display_name == "p"
        assert identity.role == "member"

    def test_to_dict(self):
        account = AccountRecord(id="7", handle="a", display_name="A", role="admin", secret="x")
        data = ResolvedIdentity.from_account(account).to_dict()

        assert data["source"] == "database"
        assert data["id"] == "7"
        assert "account" not in data
        assert "secret" not in data

    def test_to_dict_omits_missing_id(self):
        data = ResolvedIdentity.from_profile(coerce_profile({"slug": "p"})).to_dict()
        assert "id" not in data

    def test_identity_is_immutable(self):
        identity = ResolvedIdentity.noauth_admin()
        with pytest.raises(AttributeError):
            identity.role = "member"
