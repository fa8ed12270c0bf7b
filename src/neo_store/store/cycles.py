"""Containment cycle detection.

ONLY reachability - answers whether a value about to be written already
contains one of the stores it would be placed under.
"""

from typing import Any, Iterable, List, Set

from ..core.value_objects.value_kind import ValueKind, classify_value


def contains_any(value: Any, targets: Iterable[Any]) -> bool:
    """Check whether ``value`` is, or transitively contains, any target.

    Stores are followed through their backing mapping, plain mappings and
    arrays through their items. Producers are opaque and never invoked.
    """
    target_ids = {id(target) for target in targets}
    if not target_ids:
        return False

    stack: List[Any] = [value]
    visited: Set[int] = set()
    while stack:
        current = stack.pop()
        if id(current) in target_ids:
            return True
        if id(current) in visited:
            continue
        visited.add(id(current))

        kind = classify_value(current)
        if kind is ValueKind.CHILD:
            stack.extend(current.entries().values())
        elif kind is ValueKind.OBJECT:
            stack.extend(current.values())
        elif kind is ValueKind.ARRAY:
            stack.extend(current)
    return False


def may_contain_store(value: Any) -> bool:
    """Whether a value can hold a store at all."""
    return classify_value(value) in (ValueKind.CHILD, ValueKind.OBJECT, ValueKind.ARRAY)
