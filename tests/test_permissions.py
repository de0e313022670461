"""Tests for the permission registry and field declarations."""

from __future__ import annotations

import pytest

from contextstore import (
    READ_PERMISSIONS,
    WRITE_PERMISSIONS,
    Permission,
    PermissionRegistry,
    Store,
    restrict,
)


class TestPermission:
    """Tests for Permission parsing."""

    def test_short_values(self) -> None:
        """Short forms map to their members."""
        assert Permission("r") is Permission.READ
        assert Permission("w") is Permission.WRITE
        assert Permission("rw") is Permission.READ_WRITE
        assert Permission("none") is Permission.NONE

    def test_long_aliases(self) -> None:
        """Long forms are accepted, case-insensitively."""
        assert Permission("read") is Permission.READ
        assert Permission("Write") is Permission.WRITE
        assert Permission("read-write") is Permission.READ_WRITE

    def test_unknown_level(self) -> None:
        """Unknown levels are rejected."""
        with pytest.raises(ValueError):
            Permission("admin")

    def test_operation_sets(self) -> None:
        """Only r/rw grant read, only w/rw grant write."""
        assert READ_PERMISSIONS == {Permission.READ, Permission.READ_WRITE}
        assert WRITE_PERMISSIONS == {Permission.WRITE, Permission.READ_WRITE}


class TestPermissionRegistry:
    """Tests for PermissionRegistry resolution."""

    @pytest.mark.parametrize(
        ("policy", "can_read", "can_write"),
        [
            ("r", True, False),
            ("w", False, True),
            ("rw", True, True),
            ("none", False, False),
        ],
    )
    def test_unregistered_fields_follow_default(self, policy: str, can_read: bool, can_write: bool) -> None:
        """Fields without an override use default_policy."""
        registry = PermissionRegistry(default_policy=policy)
        for field in ("name", "anything", ""):
            assert registry.allowed_to_read(field) is can_read
            assert registry.allowed_to_write(field) is can_write

    @pytest.mark.parametrize("policy", ["r", "w", "rw", "none"])
    def test_override_ignores_default(self, policy: str) -> None:
        """An explicit level wins regardless of default_policy."""
        registry = PermissionRegistry(
            default_policy=policy,
            overrides={"id": "r", "token": "w", "name": "rw", "secret": "none"},
        )
        assert registry.allowed_to_read("id") and not registry.allowed_to_write("id")
        assert not registry.allowed_to_read("token") and registry.allowed_to_write("token")
        assert registry.allowed_to_read("name") and registry.allowed_to_write("name")
        assert not registry.allowed_to_read("secret") and not registry.allowed_to_write("secret")

    def test_resolve(self) -> None:
        """resolve() returns the effective level."""
        registry = PermissionRegistry(overrides={"id": "r"})
        assert registry.resolve("id") is Permission.READ
        assert registry.resolve("other") is Permission.READ_WRITE

    def test_declared_is_a_copy(self) -> None:
        """declared() cannot be used to mutate the registry."""
        registry = PermissionRegistry(overrides={"id": "r"})
        declared = registry.declared()
        declared["id"] = Permission.NONE
        assert registry.allowed_to_read("id")
        assert "id" in registry
        assert "other" not in registry


class Profile(Store):
    name = restrict("r", default="Ann")
    secret = restrict("none", default="hunter2")
    nickname = restrict(default="annie")
    address = restrict(default_factory=dict)
    token = restrict("w")


class ReadOnlyProfile(Profile):
    default_policy = "r"
    nickname = restrict("rw", default="ann")


class TestRestrict:
    """Tests for declaring fields on Store subclasses."""

    def test_declared_permissions(self) -> None:
        """Only fields with an explicit level are registered."""
        profile = Profile()
        assert profile.permissions == {
            "name": Permission.READ,
            "secret": Permission.NONE,
            "token": Permission.WRITE,
        }

    def test_declared_defaults(self) -> None:
        """Declared defaults become initial field values."""
        profile = Profile()
        assert profile.read("name") == "Ann"
        assert profile.read("nickname") == "annie"
        assert "token" not in profile

    def test_default_factory_is_per_instance(self) -> None:
        """default_factory builds a fresh value for each instance."""
        first, second = Profile(), Profile()
        first.write("address:city", "Paris")
        assert second.read("address") == {}

    def test_declarations_removed_from_class(self) -> None:
        """Declarations do not linger as class attributes."""
        assert "name" not in vars(Profile)
        assert "default_policy" not in vars(ReadOnlyProfile)

    def test_default_policy_declaration(self) -> None:
        """A class-level default_policy applies to undeclared fields."""
        profile = ReadOnlyProfile()
        assert profile.default_policy is Permission.READ
        assert profile.allowed_to_read("anything")
        assert not profile.allowed_to_write("anything")
        assert Profile().default_policy is Permission.READ_WRITE

    def test_subclass_inherits_declarations(self) -> None:
        """Subclasses keep parent declarations and may override them."""
        profile = ReadOnlyProfile()
        assert profile.read("name") == "Ann"
        assert not profile.allowed_to_read("secret")
        assert profile.read("nickname") == "ann"
        assert profile.allowed_to_write("nickname")

    def test_constructor_overrides(self) -> None:
        """Constructor permissions and policy take precedence."""
        profile = Profile(permissions={"secret": "r"}, default_policy="none")
        assert profile.read("secret") == "hunter2"
        assert not profile.allowed_to_read("nickname")

    def test_default_and_factory_conflict(self) -> None:
        """default and default_factory are mutually exclusive."""
        with pytest.raises(ValueError, match="both default and default_factory"):
            restrict(default={}, default_factory=dict)

    def test_invalid_level(self) -> None:
        """Declaring an unknown level fails at definition time."""
        with pytest.raises(ValueError):
            restrict("admin")
