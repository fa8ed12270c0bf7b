"""Access result value object.

ONLY outcome reporting - success value or the refusal/validation error
of a read or write, for callers that branch on denial instead of
catching exceptions.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..exceptions.base import NeoStoreError
from ..exceptions.invalid_path import InvalidPath
from ..exceptions.permission_denied import PermissionDenied
from .permission import AccessOperation


@dataclass(frozen=True)
class AccessResult:
    """Outcome of a non-raising store access.

    Exactly one of ``value`` (when ``ok``) or ``error`` is meaningful.
    """

    path: str
    operation: AccessOperation
    value: Any = None
    error: Optional[Union[PermissionDenied, InvalidPath]] = None

    @classmethod
    def success(cls, path: str, operation: AccessOperation, value: Any) -> "AccessResult":
        """Create a successful result."""
        return cls(path=path, operation=operation, value=value)

    @classmethod
    def failure(
        cls,
        path: str,
        operation: AccessOperation,
        error: Union[PermissionDenied, InvalidPath],
    ) -> "AccessResult":
        """Create a failed result."""
        return cls(path=path, operation=operation, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def denied(self) -> bool:
        """Whether the access was refused by a permission check."""
        return isinstance(self.error, PermissionDenied)

    @property
    def invalid(self) -> bool:
        """Whether the path was rejected."""
        return isinstance(self.error, InvalidPath)

    def unwrap(self) -> Any:
        """Return the value, raising the captured error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def value_or(self, default: Any) -> Any:
        """Return the value, or ``default`` on failure."""
        return self.value if self.error is None else default

    def __bool__(self) -> bool:
        return self.ok
