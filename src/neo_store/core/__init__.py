"""Store core domain layer.

Value objects, exceptions and protocols shared by the registry and the
store implementation. No traversal logic lives here.
"""

from .value_objects import *
from .exceptions import *
from .protocols import *

__all__ = [
    # Exceptions
    "NeoStoreError",
    "PermissionDenied",
    "InvalidPath",
    "CyclicReference",

    # Value Objects
    "Permission",
    "AccessOperation",
    "StorePath",
    "PATH_DELIMITER",
    "ValueKind",
    "classify_value",
    "AccessResult",

    # Protocols
    "StoreProtocol",
]
