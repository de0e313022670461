from .interfaces import BaseStore
from .store import Store
from .values import MISSING, NodeKind, classify
from .permissions import (
    READ_PERMISSIONS,
    WRITE_PERMISSIONS,
    Permission,
    PermissionRegistry,
    restrict,
)
from .config import DEFAULT_CONFIG, StoreConfig, LogLevel, load_store_config_from_env
from .exceptions import (
    ContextStoreError,
    ConfigurationError,
    DepthLimitExceededError,
    InvalidDelegateError,
    InvalidPathError,
    PermissionDeniedError,
)
from .logging import (
    safe_preview,
    redact_secrets,
    safe_log_value,
    StoreFormatter,
    StoreLoggerAdapter,
    setup_logging,
    get_store_logger,
)

__all__ = [
    'BaseStore',
    'Store',
    'MISSING',
    'NodeKind',
    'classify',
    'READ_PERMISSIONS',
    'WRITE_PERMISSIONS',
    'Permission',
    'PermissionRegistry',
    'restrict',
    'DEFAULT_CONFIG',
    'StoreConfig',
    'LogLevel',
    'load_store_config_from_env',
    'ContextStoreError',
    'ConfigurationError',
    'DepthLimitExceededError',
    'InvalidDelegateError',
    'InvalidPathError',
    'PermissionDeniedError',
    'safe_preview',
    'redact_secrets',
    'safe_log_value',
    'StoreFormatter',
    'StoreLoggerAdapter',
    'setup_logging',
    'get_store_logger',
]
