"""Base exception for neo-store.

Every error raised by the library inherits from NeoStoreError and carries
an error code and structured details alongside the message.
"""

from typing import Any, Dict, Optional


class NeoStoreError(Exception):
    """Base exception for all neo-store errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
