"""Cyclic reference exception.

ONLY containment errors - raised when a write would make a store tree
contain itself.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional

from .base import NeoStoreError


class CyclicReference(NeoStoreError):
    """Write would introduce a containment cycle."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason or "value already contains the store it is written into"

        super().__init__(
            f"Cyclic reference at '{path}': {self.reason}",
            error_code="STORE_CYCLIC_REFERENCE",
            details={"path": path},
        )

    @classmethod
    def self_referencing_entries(cls, path: str) -> "CyclicReference":
        """Create exception for a plain object that contains itself."""
        return cls(path, reason="entries object contains itself")
