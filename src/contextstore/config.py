"""Configuration contract for contextstore.

This module provides a Pydantic-validated configuration model for the
store engine and its logging. Stores take a ``StoreConfig`` explicitly
or fall back to ``DEFAULT_CONFIG``.

Direct os.environ/os.getenv usage is FORBIDDEN outside
``load_store_config_from_env``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigurationError
from .permissions.constants import Permission


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConfig(BaseModel):
    """Settings shared by every store instance built from this config.

    Environment variables (see ``load_store_config_from_env``):
        STORE_PATH_SEPARATOR  — separator between path segments
        STORE_MAX_DEPTH       — bound on descents through plain structures
        STORE_DEFAULT_POLICY  — access level for undeclared fields
        LOG_LEVEL             — logging level
        LOG_JSON              — JSON log format (true/false)
    """

    path_separator: str = Field(
        default=":",
        description="Separator between path segments (e.g. 'a:b:c')",
    )
    max_depth: int = Field(
        default=10,
        description="Traversal depth at which descent through plain structures aborts",
    )
    default_policy: Permission = Field(
        default=Permission.READ_WRITE,
        description="Access level applied to fields without an explicit permission",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    @field_validator("path_separator")
    @classmethod
    def validate_path_separator(cls, v: str) -> str:
        """Separator must be a non-empty string."""
        if not v:
            raise ValueError("Path separator must not be empty")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_depth must be at least 1, got {v}")
        return v

    @field_validator("default_policy", mode="before")
    @classmethod
    def validate_default_policy(cls, v: str | Permission) -> Permission:
        """Accept short and long access level names."""
        try:
            return Permission(v)
        except ValueError:
            raise ValueError(f"Invalid default policy: {v}. Must be one of {[p.value for p in Permission]}")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "frozen": True,
        "extra": "forbid",  # Prevent accidental extra fields
    }


DEFAULT_CONFIG = StoreConfig()


def load_store_config_from_env() -> StoreConfig:
    """Load store configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Environment variables:
    - STORE_PATH_SEPARATOR: Path separator (default ":")
    - STORE_MAX_DEPTH: Depth limit (default 10)
    - STORE_DEFAULT_POLICY: r | w | rw | none (default rw)
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)

    Returns:
        StoreConfig instance with values from environment or defaults.
    """
    import os

    raw_depth = os.getenv("STORE_MAX_DEPTH", "10")
    try:
        max_depth = int(raw_depth)
    except ValueError:
        raise ConfigurationError(
            f"STORE_MAX_DEPTH must be an integer, got {raw_depth!r}",
            variable="STORE_MAX_DEPTH",
        ) from None

    return StoreConfig(
        path_separator=os.getenv("STORE_PATH_SEPARATOR", ":"),
        max_depth=max_depth,
        default_policy=os.getenv("STORE_DEFAULT_POLICY", "rw"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
    )


__all__ = [
    "DEFAULT_CONFIG",
    "LogLevel",
    "StoreConfig",
    "load_store_config_from_env",
]
