"""Declarative field permissions.

ONLY field declaration - descriptor that registers a field permission when
the owning store class is created and exposes the field as an attribute.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Optional, Union

from ..core.protocols.store_protocol import StoreProtocol
from ..core.value_objects.permission import Permission
from .permission_registry import PermissionRegistry, get_permission_registry


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class Restrict:
    """Declare the permission of a store field.

    Assigned as a class attribute of a store subclass::

        class ProfileStore(Store):
            name = Restrict("r", default="John")
            token = Restrict("w")
            internal = Restrict()            # defaults to "none"

    The permission is registered for (class, attribute name) when the class
    body is executed, before any instance exists. Fields with a default and
    a permission other than ``none`` are written into each new instance.
    On an instance the attribute reads and writes the stored field
    directly, without a permission check.
    """

    def __init__(
        self,
        permission: Union[Permission, str] = Permission.NONE,
        default: Any = MISSING,
        registry: Optional[PermissionRegistry] = None,
    ):
        self.permission = Permission.coerce(permission)
        self.default = default
        self.registry = registry
        self.name: Optional[str] = None
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name
        registry = self.registry if self.registry is not None else get_permission_registry()
        registry.register(owner, name, self.permission)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def initializes_instances(self) -> bool:
        """Whether new instances receive this field's default."""
        return self.has_default and self.permission is not Permission.NONE

    def initial_value(self) -> Any:
        """Per-instance copy of the default value.

        Mappings and lists are copied, and a store default becomes a fresh
        store of the same class holding copies of its entries, so no two
        instances share mutable state or a permission domain.
        """
        return _copy_default(self.default)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.get_field(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.set_field(self.name, value)

    def __repr__(self) -> str:
        owner = self.owner.__qualname__ if self.owner else "?"
        return f"Restrict({owner}.{self.name}, permission={self.permission.value!r})"


def _copy_default(value: Any) -> Any:
    if isinstance(value, StoreProtocol):
        fresh = type(value)(default_policy=value.default_policy, settings=value.settings)
        for key, item in value.entries().items():
            fresh.set_field(key, _copy_default(item))
        return fresh
    if isinstance(value, dict):
        return {key: _copy_default(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy_default(item) for item in value]
    return value
