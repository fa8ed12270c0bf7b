"""Permission registry.

ONLY field permissions - process-wide table mapping (store class, field
name) to a Permission, filled at class-definition time and read by every
store instance afterwards.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import threading
from typing import Dict, Optional, Union
from weakref import WeakKeyDictionary

from ..core.value_objects.permission import Permission

logger = logging.getLogger(__name__)


class PermissionRegistry:
    """Registry of declared field permissions keyed by class identity.

    Entries are keyed by the class object itself, never its name, so two
    distinct classes that share a ``__name__`` keep separate tables.
    Classes are held weakly and their entries disappear with them.

    Lookups walk the MRO: a field declared on a base class applies to its
    subclasses unless a subclass declares the same field again.
    """

    def __init__(self):
        self._permissions: "WeakKeyDictionary[type, Dict[str, Permission]]" = WeakKeyDictionary()
        self._lock = threading.Lock()

    def register(
        self,
        owner_type: type,
        field: str,
        permission: Union[Permission, str],
    ) -> Permission:
        """Register the permission of ``field`` on ``owner_type``.

        Registering the same permission twice is a no-op.

        Args:
            owner_type: Class owning the field
            field: Field name
            permission: Permission tag or Permission

        Returns:
            The registered permission

        Raises:
            TypeError: If owner_type is not a class
            ValueError: If the field is already registered with a different
                permission
        """
        if not isinstance(owner_type, type):
            raise TypeError(f"owner_type must be a class, got {type(owner_type).__name__}")
        if not isinstance(field, str) or not field:
            raise ValueError("field must be a non-empty string")

        permission = Permission.coerce(permission)

        with self._lock:
            fields = self._permissions.setdefault(owner_type, {})
            existing = fields.get(field)
            if existing is not None and existing != permission:
                logger.warning(
                    f"Conflicting permission for {owner_type.__qualname__}.{field}: "
                    f"{existing.value} already registered, got {permission.value}"
                )
                raise ValueError(
                    f"Permission for {owner_type.__qualname__}.{field} is already "
                    f"registered as '{existing.value}'"
                )
            fields[field] = permission

        logger.debug(f"Registered permission {owner_type.__qualname__}.{field} = {permission.value}")
        return permission

    def resolve(self, owner_type: type, field: str) -> Optional[Permission]:
        """Get the permission declared for ``field``.

        Args:
            owner_type: Class of the store asking
            field: Field name

        Returns:
            The nearest declaration along the MRO, or None when the field
            was never declared
        """
        for klass in getattr(owner_type, "__mro__", (owner_type,)):
            fields = self._permissions.get(klass)
            if fields and field in fields:
                return fields[field]
        return None

    def is_registered(self, owner_type: type, field: str) -> bool:
        """Check whether ``owner_type`` itself declares ``field``."""
        fields = self._permissions.get(owner_type)
        return bool(fields) and field in fields

    def fields_for(self, owner_type: type) -> Dict[str, Permission]:
        """Get every declared field visible from ``owner_type``.

        Subclass declarations override base declarations.
        """
        merged: Dict[str, Permission] = {}
        for klass in reversed(getattr(owner_type, "__mro__", (owner_type,))):
            merged.update(self._permissions.get(klass, {}))
        return merged

    def __contains__(self, owner_type: object) -> bool:
        return isinstance(owner_type, type) and owner_type in self._permissions

    def __len__(self) -> int:
        return sum(len(fields) for fields in self._permissions.values())


_permission_registry = PermissionRegistry()


def get_permission_registry() -> PermissionRegistry:
    """Get the process-wide permission registry."""
    return _permission_registry
