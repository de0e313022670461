"""Per-store permission registry.

Provides:
- ``PermissionRegistry`` — field name → access level, with a default policy.
- ``restrict`` — declaration of a store field and its access level.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from .constants import READ_PERMISSIONS, WRITE_PERMISSIONS, Permission


class PermissionRegistry:
    """Resolves the access level of top-level store fields.

    Fields with an explicit override use it; every other field falls back to
    ``default_policy``. Lookups never fail: an absent entry simply means
    "inherit the default".

    Args:
        default_policy: Level applied to fields without an override.
        overrides: Mapping of field name → level for fields that deviate.

    Example::

        registry = PermissionRegistry(
            default_policy=Permission.READ_WRITE,
            overrides={"secret": Permission.NONE, "id": "r"},
        )
        registry.allowed_to_read("name")    # True (default rw)
        registry.allowed_to_read("secret")  # False
        registry.allowed_to_write("id")     # False
    """

    __slots__ = ("default_policy", "_overrides")

    def __init__(
        self,
        default_policy: Permission | str = Permission.READ_WRITE,
        overrides: Mapping[str, Permission | str] | None = None,
    ) -> None:
        self.default_policy = Permission(default_policy)
        self._overrides: dict[str, Permission] = {
            field: Permission(level) for field, level in (overrides or {}).items()
        }

    def resolve(self, field: str) -> Permission:
        """Effective access level of ``field``."""
        return self._overrides.get(field, self.default_policy)

    def allowed_to_read(self, field: str) -> bool:
        return self.resolve(field) in READ_PERMISSIONS

    def allowed_to_write(self, field: str) -> bool:
        return self.resolve(field) in WRITE_PERMISSIONS

    def declared(self) -> dict[str, Permission]:
        """Copy of the explicit overrides."""
        return dict(self._overrides)

    def __contains__(self, field: object) -> bool:
        return field in self._overrides

    def __repr__(self) -> str:
        return f"PermissionRegistry(default_policy={self.default_policy.value!r}, overrides={self._overrides!r})"


_NO_DEFAULT: Any = object()


class Restricted:
    """Field declaration produced by :func:`restrict`.

    Collected from a ``Store`` subclass body when the class is created.
    """

    __slots__ = ("permission", "default", "default_factory")

    def __init__(
        self,
        permission: Permission | None,
        default: Any = _NO_DEFAULT,
        default_factory: Callable[[], Any] | None = None,
    ) -> None:
        if default is not _NO_DEFAULT and default_factory is not None:
            raise ValueError("cannot specify both default and default_factory")
        self.permission = permission
        self.default = default
        self.default_factory = default_factory

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT or self.default_factory is not None

    def initial_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def __repr__(self) -> str:
        return f"restrict({self.permission.value if self.permission else None!r})"


def restrict(
    permission: Permission | str | None = None,
    *,
    default: Any = _NO_DEFAULT,
    default_factory: Callable[[], Any] | None = None,
) -> Any:
    """Declare a store field with an optional fixed access level.

    Without a permission nothing is registered and the store's
    ``default_policy`` applies to the field.

    Args:
        permission: Access level for the field (``"r"``, ``"w"``, ``"rw"``, ``"none"``).
        default: Initial value of the field. A callable is stored as a
            deferred producer, not called.
        default_factory: Zero-argument callable building a fresh initial
            value per instance (use for dicts and lists).

    Example::

        class Profile(Store):
            name = restrict("r", default="Ann")
            secret = restrict("none", default="hunter2")
            address = restrict(default_factory=dict)
    """
    level = Permission(permission) if permission is not None else None
    return Restricted(level, default=default, default_factory=default_factory)


__all__ = [
    "PermissionRegistry",
    "Restricted",
    "restrict",
]
