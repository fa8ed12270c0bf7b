"""Store implementation."""

from .store import Store
from .flattening import flatten_entries, is_flattenable
from .cycles import contains_any

__all__ = [
    "Store",
    "flatten_entries",
    "is_flattenable",
    "contains_any",
]
