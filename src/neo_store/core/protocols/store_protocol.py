"""Store node protocol.

ONLY store contract - the structural interface every store node offers
to callers and to parent stores delegating into it.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class StoreProtocol(Protocol):
    """Store node protocol.

    Defines the operations a parent store relies on when a path crosses
    into a child:
    - Permission predicates for a single key
    - Path based read and write
    - Bulk write of nested entries
    - Raw access to the backing mapping
    """

    def allowed_to_read(self, key: str) -> bool:
        """Whether ``key`` may be read on this node."""
        ...

    def allowed_to_write(self, key: str) -> bool:
        """Whether ``key`` may be written on this node."""
        ...

    def read(self, path: str) -> Any:
        """Read the value at ``path``.

        Returns None when nothing is stored there.
        """
        ...

    def write(self, path: str, value: Any) -> Any:
        """Write ``value`` at ``path`` and return it."""
        ...

    def write_entries(self, entries: Dict[str, Any], origin_path: str = "") -> None:
        """Write every leaf of a nested mapping."""
        ...

    def entries(self) -> Dict[str, Any]:
        """Backing mapping of this node (live reference)."""
        ...
