"""Access level constants for store fields.

Defines:
- Permission: the four access levels a field can carry
- READ_PERMISSIONS / WRITE_PERMISSIONS: levels that grant each operation
"""

from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    """Access level of a single store field.

    Values match the short form used in declarations (``"r"``, ``"w"``,
    ``"rw"``, ``"none"``). The long forms ``"read"``, ``"write"`` and
    ``"read-write"`` are accepted as aliases when parsing.
    """

    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"
    NONE = "none"

    @classmethod
    def _missing_(cls, value: object) -> Permission | None:
        if isinstance(value, str):
            return _ALIASES.get(value.strip().lower())
        return None

    def __str__(self) -> str:
        return self.value


_ALIASES: dict[str, Permission] = {
    "r": Permission.READ,
    "read": Permission.READ,
    "w": Permission.WRITE,
    "write": Permission.WRITE,
    "rw": Permission.READ_WRITE,
    "read-write": Permission.READ_WRITE,
    "read_write": Permission.READ_WRITE,
    "none": Permission.NONE,
}

READ_PERMISSIONS: frozenset[Permission] = frozenset({Permission.READ, Permission.READ_WRITE})
WRITE_PERMISSIONS: frozenset[Permission] = frozenset({Permission.WRITE, Permission.READ_WRITE})


__all__ = [
    "Permission",
    "READ_PERMISSIONS",
    "WRITE_PERMISSIONS",
]
