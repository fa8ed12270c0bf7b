"""Permission registry and declarative field permissions."""

from .permission_registry import PermissionRegistry, get_permission_registry
from .restrict import Restrict, MISSING

__all__ = [
    "PermissionRegistry",
    "get_permission_registry",
    "Restrict",
    "MISSING",
]
