"""Store value kinds.

ONLY value classification - tags every value a store can hold so that
read and write dispatch on an explicit variant instead of ad-hoc type
checks scattered through the traversal code.

Following maximum separation architecture - one file = one purpose.
"""

from enum import Enum
from typing import Any

from ..protocols.store_protocol import StoreProtocol


class ValueKind(str, Enum):
    """Variant of a stored value."""

    ABSENT = "absent"   # missing key or JSON null
    SCALAR = "scalar"   # bool, int, float, str
    ARRAY = "array"     # list / tuple
    OBJECT = "object"   # plain dict
    CHILD = "child"     # nested store node
    LAZY = "lazy"       # zero-argument producer

    @property
    def is_container(self) -> bool:
        """Whether a write may nest beneath a value of this kind."""
        return self in (ValueKind.OBJECT, ValueKind.CHILD)


def classify_value(value: Any) -> ValueKind:
    """Return the variant tag of a stored value.

    Store nodes are recognised structurally through StoreProtocol, so any
    object that behaves like a store is treated as a child container.
    """
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, StoreProtocol):
        return ValueKind.CHILD
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if callable(value):
        return ValueKind.LAZY
    return ValueKind.SCALAR
