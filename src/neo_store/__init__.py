"""Neo-Store - permissioned hierarchical key-value container.

In-process tree of values addressed by colon-delimited paths, with
per-field read/write permissions declared on store classes, nested child
stores carrying their own permission domain, and lazily evaluated values.
"""

from .__version__ import __version__

from .core import (
    # Exceptions
    NeoStoreError,
    PermissionDenied,
    InvalidPath,
    CyclicReference,

    # Value Objects
    Permission,
    AccessOperation,
    AccessResult,
    StorePath,
    ValueKind,
    classify_value,

    # Protocols
    StoreProtocol,
)

from .config import (
    StoreSettings,
    get_settings,
    setup_logging,
    get_logger,
)

from .registry import (
    PermissionRegistry,
    get_permission_registry,
    Restrict,
)

from .store import Store

__all__ = [
    "__version__",

    # Store
    "Store",

    # Registry
    "PermissionRegistry",
    "get_permission_registry",
    "Restrict",

    # Exceptions
    "NeoStoreError",
    "PermissionDenied",
    "InvalidPath",
    "CyclicReference",

    # Value Objects
    "Permission",
    "AccessOperation",
    "AccessResult",
    "StorePath",
    "ValueKind",
    "classify_value",

    # Protocols
    "StoreProtocol",

    # Configuration
    "StoreSettings",
    "get_settings",
    "setup_logging",
    "get_logger",
]
