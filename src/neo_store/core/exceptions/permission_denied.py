"""Permission denied exception.

ONLY access errors - raised when the store that owns a key refuses the
requested read or write.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional, Union

from ..value_objects.permission import AccessOperation, Permission
from .base import NeoStoreError


class PermissionDenied(NeoStoreError):
    """Read or write refused by the owning store.

    Attributes:
        path: Full path of the call that was refused
        operation: ``read`` or ``write``
        key: Key checked on the owning store
        owner: Class name of the store that owns the key
        permission: Effective permission of the key on that store
    """

    def __init__(
        self,
        path: str,
        operation: Union[AccessOperation, str],
        key: Optional[str] = None,
        owner: Optional[str] = None,
        permission: Optional[Permission] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.path = path
        self.operation = AccessOperation(operation)
        self.key = key if key is not None else path
        self.owner = owner
        self.permission = permission

        message = f"Permission denied: cannot {self.operation.value} '{path}'"
        if owner and self.key != path:
            message += f" ('{self.key}' on {owner})"
        elif owner:
            message += f" (on {owner})"

        super().__init__(
            message,
            error_code=error_code or f"STORE_{self.operation.value.upper()}_DENIED",
            details={
                "path": path,
                "operation": self.operation.value,
                "key": self.key,
                "owner": owner,
                "permission": permission.value if permission else None,
                **(details or {}),
            },
        )

    def rescoped(self, path: str) -> "PermissionDenied":
        """Copy of this error reported against a longer caller path."""
        return type(self)(
            path,
            self.operation,
            key=self.key,
            owner=self.owner,
            permission=self.permission,
        )

    @classmethod
    def for_read(
        cls,
        path: str,
        key: str,
        owner: Optional[str] = None,
        permission: Optional[Permission] = None,
    ) -> "PermissionDenied":
        """Create exception for a refused read."""
        return cls(path, AccessOperation.READ, key=key, owner=owner, permission=permission)

    @classmethod
    def for_write(
        cls,
        path: str,
        key: str,
        owner: Optional[str] = None,
        permission: Optional[Permission] = None,
    ) -> "PermissionDenied":
        """Create exception for a refused write."""
        return cls(path, AccessOperation.WRITE, key=key, owner=owner, permission=permission)
