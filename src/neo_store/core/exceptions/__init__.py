"""Store exceptions.

One exception per file following maximum separation architecture.
"""

from .base import NeoStoreError
from .permission_denied import PermissionDenied
from .invalid_path import InvalidPath
from .cyclic_reference import CyclicReference

__all__ = [
    "NeoStoreError",
    "PermissionDenied",
    "InvalidPath",
    "CyclicReference",
]
