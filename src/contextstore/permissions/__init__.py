"""Field permission registry for contextstore.

Defines:
- Permission: access levels (r / w / rw / none)
- READ_PERMISSIONS / WRITE_PERMISSIONS: levels granting each operation
- PermissionRegistry: per-store field → level mapping with a default policy
- restrict(): declaration of a store field and its access level
"""

from .constants import READ_PERMISSIONS, WRITE_PERMISSIONS, Permission
from .registry import PermissionRegistry, Restricted, restrict

__all__ = [
    "READ_PERMISSIONS",
    "WRITE_PERMISSIONS",
    "Permission",
    "PermissionRegistry",
    "Restricted",
    "restrict",
]
