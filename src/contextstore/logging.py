"""Centralized logging utilities for contextstore.

This module provides:
- Logging configuration from StoreConfig
- Safe preview utilities for stored values
- Secret redaction
- Structured logging with store/path context
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from .config import LogLevel, StoreConfig


# Patterns for detecting secrets (common patterns to redact)
SECRET_PATTERNS = [
    r'(?i)(?:password|passwd|pwd|secret|token|key|api[_-]?key|auth[_-]?token)\s*[:=]\s*["\']?([^"\'\s]+)',
    r'(?i)(?:bearer|basic)\s+([a-zA-Z0-9+/=]+)',
    r'(?i)(?:sk-|pk-)[a-zA-Z0-9]{32,}',
    r'[a-f0-9]{32,}',  # Long hex strings (could be hashes or keys)
]

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "store", "path",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Single-line preview of a stored value, at most ``limit`` characters.

    Dicts and lists render as JSON; a deferred producer nested inside them,
    or passed directly, is shown as ``<deferred name>`` and never invoked.
    Missing data (``None``) previews as an empty string.
    """
    if value is None:
        return ""

    if isinstance(value, str):
        text = value
    elif isinstance(value, (dict, list)):
        try:
            text = json.dumps(value, default=_describe, ensure_ascii=False)
        except (TypeError, ValueError):
            text = str(value)
    elif callable(value) and not isinstance(value, type):
        text = _describe(value)
    else:
        text = str(value)

    text = " ".join(text.split())
    if len(text) > limit:
        return text[: limit - 1] + "…"
    return text


def _describe(value: Any) -> str:
    if callable(value):
        return f"<deferred {getattr(value, '__qualname__', type(value).__name__)}>"
    return str(value)


def redact_secrets(text: str, replacement: str = "[REDACTED]") -> str:
    """Mask credential-looking fragments of a previewed value.

    Stores often hold passwords, tokens and keys in plain fields; any match
    of ``SECRET_PATTERNS`` is replaced. Non-string input is returned as is.
    """
    if not isinstance(text, str):
        return text

    for pattern in SECRET_PATTERNS:
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE | re.DOTALL)
    return text


def safe_log_value(value: Any, limit: int = 240, redact: bool = True) -> str:
    """Render a field value for a log message.

    The store logs written values through this, so a log line never carries
    more than ``limit`` characters of a value or an unmasked secret.
    """
    preview = safe_preview(value, limit=limit)
    return redact_secrets(preview) if redact else preview


class StoreFormatter(logging.Formatter):
    """Formatter that includes store/path context, as JSON or plain text."""

    def __init__(
        self,
        json_format: bool = True,
        redact_secrets: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.json_format = json_format
        self.redact_secrets = redact_secrets

    def format(self, record: logging.LogRecord) -> str:
        store = getattr(record, "store", None)
        path = getattr(record, "path", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if store:
            log_data["store"] = store
        if path is not None:
            log_data["path"] = path

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_data[key] = safe_log_value(value, redact=self.redact_secrets)

        if self.redact_secrets:
            log_data["message"] = redact_secrets(log_data["message"])

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if store:
            parts.append(f"store={store}")
        if path is not None:
            parts.append(f"path={path}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class StoreLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds ``store`` and ``path`` to log records.

    Usage:
        logger = get_store_logger(__name__, store="Profile")
        logger.debug("Delegating", path="address:city")
    """

    def __init__(self, logger: logging.Logger, store: Optional[str] = None):
        super().__init__(logger, {})
        self.store = store

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        store = kwargs.pop("store", self.store)
        path = kwargs.pop("path", None)

        extra = dict(kwargs.get("extra") or {})
        if store:
            extra["store"] = store
        if path is not None:
            extra["path"] = path
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[StoreConfig] = None,
    json_format: Optional[bool] = None,
    redact_secrets: bool = True,
) -> None:
    """Configure root logging from a StoreConfig.

    Args:
        config: StoreConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
        redact_secrets: Whether to redact secrets (default: True)
    """
    if config is None:
        from .config import load_store_config_from_env
        config = load_store_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        StoreFormatter(
            json_format=config.log_json if json_format is None else json_format,
            redact_secrets=redact_secrets,
        )
    )
    root_logger.addHandler(console_handler)


def get_store_logger(name: str, store: Optional[str] = None) -> StoreLoggerAdapter:
    """Get a logger adapter carrying store context.

    Args:
        name: Logger name (typically __name__)
        store: Store name to include in all records

    Example:
        logger = get_store_logger(__name__, store=type(self).__name__)
        logger.warning("Denied write", path="secret")
    """
    return StoreLoggerAdapter(logging.getLogger(name), store=store)


__all__ = [
    "safe_preview",
    "redact_secrets",
    "safe_log_value",
    "StoreFormatter",
    "StoreLoggerAdapter",
    "setup_logging",
    "get_store_logger",
]
