"""Classification of the values a path walk can meet.

The engine never inspects types ad hoc: each step classifies the node it
resolved into a ``NodeKind`` and switches on it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from .exceptions import InvalidPathError
from .interfaces import BaseStore

JSONPrimitive = Union[str, int, float, bool, None]


class _Missing:
    """Sentinel for "nothing stored here"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class NodeKind(str, Enum):
    """Kind of a node resolved during a path walk."""

    STORE = "store"  # Permission boundary, delegate the rest of the path
    DEFERRED = "deferred"  # Zero-argument producer, invoked on every access
    STRUCTURE = "structure"  # Plain dict or list
    SCALAR = "scalar"  # JSON primitive or any other opaque value
    MISSING = "missing"


def classify(value: Any) -> NodeKind:
    """Tag ``value`` with its ``NodeKind``.

    Stores are checked before callables so a callable store still counts
    as a boundary.
    """
    if value is MISSING:
        return NodeKind.MISSING
    if isinstance(value, BaseStore):
        return NodeKind.STORE
    if callable(value):
        return NodeKind.DEFERRED
    if isinstance(value, (dict, list)):
        return NodeKind.STRUCTURE
    return NodeKind.SCALAR


def index_of(segment: str) -> int | None:
    """List index named by ``segment``, or None if it is not a decimal index."""
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def get_child(node: Any, segment: str) -> Any:
    """Value stored under ``segment`` in a plain structure, or MISSING.

    Scalars and missing nodes have no children.
    """
    if isinstance(node, dict):
        return node.get(segment, MISSING)
    if isinstance(node, list):
        index = index_of(segment)
        if index is not None and index < len(node):
            return node[index]
    return MISSING


def set_child(node: Any, segment: str, value: Any) -> None:
    """Store ``value`` under ``segment`` in a plain structure.

    Lists accept decimal indexes up to their length: an existing index is
    replaced, ``len(node)`` appends.

    Raises:
        InvalidPathError: ``segment`` does not address a slot of ``node``.
    """
    if isinstance(node, dict):
        node[segment] = value
        return
    if isinstance(node, list):
        index = index_of(segment)
        if index is None:
            raise InvalidPathError(
                f"Cannot write segment '{segment}' into a list",
                segment=segment,
            )
        if index < len(node):
            node[index] = value
        elif index == len(node):
            node.append(value)
        else:
            raise InvalidPathError(
                f"Index {index} is past the end of a list of length {len(node)}",
                segment=segment,
            )
        return
    raise InvalidPathError(
        f"Cannot write segment '{segment}' into {type(node).__name__}",
        segment=segment,
    )


__all__ = [
    "JSONPrimitive",
    "MISSING",
    "NodeKind",
    "classify",
    "get_child",
    "index_of",
    "set_child",
]
