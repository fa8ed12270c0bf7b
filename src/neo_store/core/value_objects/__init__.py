"""Store value objects.

Immutable values following maximum separation - one value object per file.
"""

from .permission import Permission, AccessOperation
from .store_path import StorePath, PATH_DELIMITER
from .value_kind import ValueKind, classify_value
from .access_result import AccessResult

__all__ = [
    "Permission",
    "AccessOperation",
    "StorePath",
    "PATH_DELIMITER",
    "ValueKind",
    "classify_value",
    "AccessResult",
]
