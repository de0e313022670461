"""Permission-guarded, path-addressable store.

A ``Store`` owns a mapping of fields and a ``PermissionRegistry``. Paths
such as ``"address:city"`` are split on the configured separator and walked
through plain dicts and lists, nested stores and deferred producers:

- Reads check the first segment against the store's registry, then walk.
- Writes check the last segment against the registry of the store that owns
  the node being written, however many plain levels deep it is.
- Reaching a nested store (or a producer returning one) hands the rest of
  the path to that store, which enforces its own permissions.
- Descent through plain structures is bounded by ``config.max_depth``.

Example::

    class Profile(Store):
        name = restrict(default="Ann")
        secret = restrict("none", default="hunter2")

    profile = Profile()
    profile.read("name")                  # "Ann"
    profile.write("address:city", "Paris")
    profile.read("address:city")          # "Paris"
    profile.read("secret")                # PermissionDeniedError
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping

from .config import DEFAULT_CONFIG, StoreConfig
from .exceptions import DepthLimitExceededError, InvalidDelegateError, PermissionDeniedError
from .interfaces import BaseStore
from .logging import get_store_logger, safe_log_value
from .permissions import Permission, PermissionRegistry, Restricted
from .values import NodeKind, classify, get_child, set_child

# Bookkeeping entry reported by entries() next to user fields
DEFAULT_POLICY_ENTRY = "default_policy"


class Store(BaseStore):
    """Mutable node owning fields and their access levels.

    Fields and permissions are declared on subclasses with :func:`restrict`
    and a ``default_policy`` class attribute, or passed to the constructor.

    Args:
        fields: Initial field values. Set without permission checks.
        permissions: Field → access level overrides, merged over declared ones.
        default_policy: Level for undeclared fields. Falls back to the class
            declaration, then to ``config.default_policy``.
        config: Engine settings (separator, depth limit).
    """

    _declared_fields: ClassVar[dict[str, Restricted]] = {}
    _declared_permissions: ClassVar[dict[str, Permission]] = {}
    _declared_policy: ClassVar[Permission | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        fields = dict(cls._declared_fields)
        permissions = dict(cls._declared_permissions)
        for name, attr in list(vars(cls).items()):
            if isinstance(attr, Restricted):
                fields[name] = attr
                if attr.permission is not None:
                    permissions[name] = attr.permission
                delattr(cls, name)
        cls._declared_fields = fields
        cls._declared_permissions = permissions

        policy = vars(cls).get("default_policy")
        if policy is not None and not isinstance(policy, property):
            cls._declared_policy = Permission(policy)
            delattr(cls, "default_policy")

    def __init__(
        self,
        fields: Mapping[str, Any] | None = None,
        *,
        permissions: Mapping[str, Permission | str] | None = None,
        default_policy: Permission | str | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        if default_policy is None:
            default_policy = self._declared_policy or self.config.default_policy
        self._registry = PermissionRegistry(
            default_policy,
            {**self._declared_permissions, **(permissions or {})},
        )
        self._fields: dict[str, Any] = {
            name: decl.initial_value() for name, decl in self._declared_fields.items() if decl.has_default
        }
        if fields:
            self._fields.update(fields)
        self._logger = get_store_logger(__name__, store=type(self).__name__)

    # ── Permission introspection ───────────────────────

    @property
    def default_policy(self) -> Permission:
        return self._registry.default_policy

    @property
    def permissions(self) -> dict[str, Permission]:
        """Explicit field overrides (fields not listed use ``default_policy``)."""
        return self._registry.declared()

    def allowed_to_read(self, field: str) -> bool:
        return self._registry.allowed_to_read(field)

    def allowed_to_write(self, field: str) -> bool:
        return self._registry.allowed_to_write(field)

    # ── Path access ────────────────────────────────────

    def read(self, path: str) -> Any:
        """Resolve ``path`` and return the value found there.

        Missing data reads as ``None``. A deferred producer at the end of
        the path is invoked and its result returned.

        Raises:
            PermissionDeniedError: The first segment is not readable here.
            DepthLimitExceededError: The walk went ``max_depth`` levels deep.
            InvalidDelegateError: A producer mid-path did not return a store.
        """
        return self._read(path, 0)

    def write(self, path: str, value: Any) -> Any:
        """Store ``value`` at ``path``, creating missing dicts on the way.

        A failed write leaves the store untouched: placeholders are only
        attached once the rest of the walk has succeeded.

        Returns:
            ``value``, for chaining.

        Raises:
            PermissionDeniedError: The last segment is not writable in the
                store owning it.
            DepthLimitExceededError: The walk went ``max_depth`` levels deep.
            InvalidDelegateError: A producer mid-path did not return a store.
            InvalidPathError: A list was addressed with a non-index segment
                or an index past its end.
        """
        self._write(path, value, 0)
        return value

    def entries(self) -> dict[str, Any]:
        """Shallow snapshot of every readable field, raw.

        Deferred producers are returned as stored, not invoked. The
        ``default_policy`` bookkeeping entry is listed first when readable.
        """
        snapshot: dict[str, Any] = {}
        if self.allowed_to_read(DEFAULT_POLICY_ENTRY):
            snapshot[DEFAULT_POLICY_ENTRY] = self.default_policy.value
        for name, value in self._fields.items():
            if self.allowed_to_read(name):
                snapshot[name] = value
        return snapshot

    # ── Walkers ────────────────────────────────────────
    #
    # ``depth`` counts descents through plain structures inside this store.
    # ``hops`` counts store boundaries crossed since the top-level call; both
    # are bounded by ``config.max_depth``.

    def _read(self, path: str, hops: int) -> Any:
        segments = path.split(self.config.path_separator)
        head = segments[0]
        if not self.allowed_to_read(head):
            self._logger.warning("Denied read of field '%s'", head, path=path)
            raise PermissionDeniedError(head, "read")
        return self._read_from(self._fields, segments, 0, hops)

    def _write(self, path: str, value: Any, hops: int) -> None:
        self._write_into(self._fields, path.split(self.config.path_separator), value, 0, hops, path)
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug("Wrote %s", safe_log_value(value, limit=80), path=path)

    def _read_from(self, node: Any, segments: list[str], depth: int, hops: int) -> Any:
        head, tail = segments[0], segments[1:]
        value = get_child(node, head)
        kind = classify(value)

        if not tail:
            if kind is NodeKind.DEFERRED:
                return value()
            return None if kind is NodeKind.MISSING else value

        if kind is NodeKind.STORE or kind is NodeKind.DEFERRED:
            rest = self.config.path_separator.join(tail)
            store = self._delegate(head, value, rest, hops)
            if isinstance(store, Store):
                return store._read(rest, hops + 1)
            return store.read(rest)

        if depth + 1 >= self.config.max_depth:
            raise DepthLimitExceededError(self.config.max_depth)
        return self._read_from(value, tail, depth + 1, hops)

    def _write_into(
        self,
        node: Any,
        segments: list[str],
        value: Any,
        depth: int,
        hops: int,
        path: str,
    ) -> None:
        head, tail = segments[0], segments[1:]

        if not tail:
            if not self.allowed_to_write(head):
                self._logger.warning("Denied write of field '%s'", head, path=path)
                raise PermissionDeniedError(head, "write")
            set_child(node, head, value)
            return

        current = get_child(node, head)
        kind = classify(current)

        if kind is NodeKind.STORE or kind is NodeKind.DEFERRED:
            rest = self.config.path_separator.join(tail)
            store = self._delegate(head, current, rest, hops)
            if isinstance(store, Store):
                store._write(rest, value, hops + 1)
            else:
                store.write(rest, value)
            return

        if depth + 1 >= self.config.max_depth:
            raise DepthLimitExceededError(self.config.max_depth)

        if kind is NodeKind.STRUCTURE:
            self._write_into(current, tail, value, depth + 1, hops, path)
            return

        # Missing or scalar: build the branch detached, attach on success
        placeholder: dict[str, Any] = {}
        self._write_into(placeholder, tail, value, depth + 1, hops, path)
        set_child(node, head, placeholder)

    def _delegate(self, field: str, value: Any, rest: str, hops: int) -> BaseStore:
        """Store that takes over the walk at ``field``.

        Other ``BaseStore`` implementations restart their own counting.
        """
        if hops + 1 >= self.config.max_depth:
            raise DepthLimitExceededError(self.config.max_depth, hops=hops + 1)
        store = value() if classify(value) is NodeKind.DEFERRED else value
        if classify(store) is not NodeKind.STORE:
            raise InvalidDelegateError(
                f"Deferred value at '{field}' produced {type(store).__name__}, expected a store",
                field=field,
            )
        self._logger.debug("Delegating '%s' to %s at '%s'", rest, type(store).__name__, field)
        return store

    # ── Dunder helpers ─────────────────────────────────

    def __contains__(self, field: object) -> bool:
        return field in self._fields

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fields={sorted(self._fields)!r}, default_policy={self.default_policy.value!r})"


__all__ = [
    "DEFAULT_POLICY_ENTRY",
    "Store",
]
