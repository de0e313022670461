"""Unified exception hierarchy for contextstore.

All errors raised by the store inherit from ContextStoreError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to exception classes

Usage:
    from contextstore.exceptions import (
        ContextStoreError,
        DepthLimitExceededError,
        PermissionDeniedError,
    )

Applications may define thin subclasses for their own errors:
    @register_error("QUOTA_ERROR")
    class QuotaError(ContextStoreError):
        code = "QUOTA_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "ContextStoreError",
    "ConfigurationError",
    "PermissionDeniedError",
    "DepthLimitExceededError",
    "InvalidDelegateError",
    "InvalidPathError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class ContextStoreError(Exception):
    """Base exception for all store failures.

    Attributes:
        code: Stable error code string (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(ContextStoreError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class PermissionDeniedError(ContextStoreError, PermissionError):
    """A field was accessed without the required access level.

    Raised at store boundaries only: the first segment of a read, or the
    terminal segment of a write, checked against the owning store.
    """

    code: str = "PERMISSION_DENIED"

    def __init__(self, field: str, operation: str = "read", **kwargs: Any) -> None:
        self.field = field
        self.operation = operation
        super().__init__(
            f"Insufficient permission to {operation} {field}",
            field=field,
            operation=operation,
            **kwargs,
        )


class DepthLimitExceededError(ContextStoreError, RecursionError):
    """Descent through plain nested structures hit the depth limit."""

    code: str = "DEPTH_LIMIT_EXCEEDED"

    def __init__(self, limit: int, **kwargs: Any) -> None:
        self.limit = limit
        super().__init__(
            f"Reached depth limit of {limit}. Please adjust max_depth if needed.",
            limit=limit,
            **kwargs,
        )


class InvalidDelegateError(ContextStoreError, TypeError):
    """A deferred producer in the middle of a path did not yield a store."""

    code: str = "INVALID_DELEGATE"


class InvalidPathError(ContextStoreError, KeyError):
    """A path segment cannot address the node it was applied to."""

    code: str = "INVALID_PATH"

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return self.message


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[ContextStoreError])


class ErrorRegistry:
    """Registry for mapping stable error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[ContextStoreError]] = {}

    def register(self, code: str, error_cls: type[ContextStoreError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[ContextStoreError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[ContextStoreError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(ContextStoreError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", ContextStoreError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("PERMISSION_DENIED", PermissionDeniedError)
error_registry.register("DEPTH_LIMIT_EXCEEDED", DepthLimitExceededError)
error_registry.register("INVALID_DELEGATE", InvalidDelegateError)
error_registry.register("INVALID_PATH", InvalidPathError)
