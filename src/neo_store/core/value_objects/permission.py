"""Permission value object.

ONLY permission tags - the four access levels a store field can carry
and the read/write questions asked of them.

Following maximum separation architecture - one file = one purpose.
"""

from enum import Enum
from typing import Union


class Permission(str, Enum):
    """Access level of a store field.

    The value is the compact tag used in declarations (``"r"``, ``"w"``,
    ``"rw"``, ``"none"``). The long spellings ``"read"``, ``"write"`` and
    ``"read-write"`` are accepted by :meth:`coerce`.
    """

    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"
    NONE = "none"

    @property
    def allows_read(self) -> bool:
        """Whether this permission grants read access."""
        return self in (Permission.READ, Permission.READ_WRITE)

    @property
    def allows_write(self) -> bool:
        """Whether this permission grants write access."""
        return self in (Permission.WRITE, Permission.READ_WRITE)

    @classmethod
    def coerce(cls, value: Union["Permission", str]) -> "Permission":
        """Convert a tag or long spelling into a Permission.

        Args:
            value: Permission instance, compact tag or long spelling

        Returns:
            Matching Permission

        Raises:
            ValueError: If the value is not a known permission
        """
        if isinstance(value, Permission):
            return value

        normalized = str(value).strip().lower().replace("_", "-")
        aliases = {
            "read": cls.READ,
            "write": cls.WRITE,
            "read-write": cls.READ_WRITE,
            "readwrite": cls.READ_WRITE,
        }
        if normalized in aliases:
            return aliases[normalized]

        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown permission '{value}'. Expected one of: {valid}")

    def __str__(self) -> str:
        return self.value


class AccessOperation(str, Enum):
    """Operation attempted against a store path."""

    READ = "read"
    WRITE = "write"

    def __str__(self) -> str:
        return self.value
