"""Invalid path exception.

ONLY path errors - raised when a path cannot be parsed or cannot be
traversed for a write.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import NeoStoreError


class InvalidPath(NeoStoreError, ValueError):
    """Malformed or untraversable store path."""

    def __init__(
        self,
        path: Any,
        reason: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.path = path
        self.reason = reason

        super().__init__(
            f"Invalid store path '{path}': {reason}",
            error_code=error_code or "STORE_PATH_INVALID",
            details={"path": path, "reason": reason, **(details or {})},
        )

    @classmethod
    def not_a_string(cls, path: Any) -> "InvalidPath":
        """Create exception for a path that is not a string."""
        return cls(
            path=path,
            reason=f"path must be a string, got {type(path).__name__}",
            error_code="STORE_PATH_NOT_STRING",
        )

    @classmethod
    def empty(cls) -> "InvalidPath":
        """Create exception for an empty path."""
        return cls(path="", reason="path cannot be empty", error_code="STORE_PATH_EMPTY")

    @classmethod
    def empty_segment(cls, path: str, position: int) -> "InvalidPath":
        """Create exception for a path with an empty segment."""
        return cls(
            path=path,
            reason=f"segment {position} is empty",
            error_code="STORE_PATH_EMPTY_SEGMENT",
            details={"position": position},
        )

    @classmethod
    def overlapping(cls, path: str, nested: str) -> "InvalidPath":
        """Create exception for entries that write both a path and beneath it."""
        return cls(
            path=path,
            reason=f"entries also write beneath it at '{nested}'",
            error_code="STORE_PATH_OVERLAPPING",
            details={"nested": nested},
        )

    @classmethod
    def not_a_container(cls, path: str, segment: str, kind: str) -> "InvalidPath":
        """Create exception for a write that nests beneath a leaf value."""
        return cls(
            path=path,
            reason=f"cannot nest beneath '{segment}', it holds a {kind} value",
            error_code="STORE_PATH_NOT_CONTAINER",
            details={"segment": segment, "kind": kind},
        )
