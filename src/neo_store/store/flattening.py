"""Entry flattening.

ONLY nested-entry decomposition - turns a nested plain mapping into the
list of (path, leaf value) writes it stands for.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, List, Optional, Set, Tuple

from ..core.exceptions.cyclic_reference import CyclicReference
from ..core.exceptions.invalid_path import InvalidPath
from ..core.value_objects.store_path import StorePath
from ..core.value_objects.value_kind import ValueKind, classify_value


def is_flattenable(value: Any) -> bool:
    """Whether a written value is decomposed into leaf writes.

    Only non-empty plain mappings are; an empty mapping is stored as is.
    """
    return classify_value(value) is ValueKind.OBJECT and bool(value)


def flatten_entries(
    entries: Dict[str, Any],
    origin: Optional[StorePath] = None,
) -> List[Tuple[StorePath, Any]]:
    """Collect every leaf of ``entries`` with its full path.

    Non-empty mappings are recursed into depth first; everything else
    (scalars, arrays, empty mappings, stores, producers) is a leaf.
    Keys containing the path delimiter address nested paths.

    Args:
        entries: Nested plain mapping
        origin: Path the entries are written under

    Returns:
        Ordered (path, value) pairs

    Raises:
        CyclicReference: If the mapping contains itself
        InvalidPath: If a key is empty, or one leaf lies beneath another
    """
    leaves: List[Tuple[StorePath, Any]] = []
    _collect(entries, origin.segments if origin else (), leaves, set())
    _reject_nested_leaves(leaves)
    return leaves


def _reject_nested_leaves(leaves: List[Tuple[StorePath, Any]]) -> None:
    """Refuse leaves written beneath another leaf of the same entries.

    Repeating the same path is allowed; the last one wins.
    """
    # Sorted segment tuples place a path right before its extensions
    ordered = sorted({path.segments for path, _ in leaves})
    for shorter, longer in zip(ordered, ordered[1:]):
        if longer[: len(shorter)] == shorter:
            raise InvalidPath.overlapping(":".join(shorter), ":".join(longer))


def _collect(
    entries: Dict[str, Any],
    prefix: Tuple[str, ...],
    leaves: List[Tuple[StorePath, Any]],
    active: Set[int],
) -> None:
    if id(entries) in active:
        raise CyclicReference.self_referencing_entries(":".join(prefix) or "<root>")

    active.add(id(entries))
    for key, value in entries.items():
        path = prefix + StorePath.parse(str(key)).segments
        if is_flattenable(value):
            _collect(value, path, leaves, active)
        else:
            leaves.append((StorePath(path), value))
    active.discard(id(entries))
