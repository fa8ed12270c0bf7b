"""Store node.

ONLY the addressable container - path based read and write over a tree
of plain mappings and child stores, with permissions checked on the node
that owns each mutated key.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config.settings import StoreSettings, get_settings
from ..core.exceptions.invalid_path import InvalidPath
from ..core.exceptions.permission_denied import PermissionDenied
from ..core.exceptions.cyclic_reference import CyclicReference
from ..core.protocols.store_protocol import StoreProtocol
from ..core.value_objects.access_result import AccessResult
from ..core.value_objects.permission import AccessOperation, Permission
from ..core.value_objects.store_path import StorePath
from ..core.value_objects.value_kind import ValueKind, classify_value
from ..registry.permission_registry import PermissionRegistry, get_permission_registry
from ..registry.restrict import Restrict
from .cycles import contains_any, may_contain_store
from .flattening import flatten_entries, is_flattenable

logger = logging.getLogger(__name__)

PathLike = Union[StorePath, str]


@dataclass
class _WritePlan:
    """Outcome of the permission resolution phase of a write."""

    # (store, key) pairs whose mapping entry the write mutates
    checks: List[Tuple[StoreProtocol, str]] = field(default_factory=list)
    # Containers to attach for missing intermediates, by segment index
    created: Dict[int, Any] = field(default_factory=dict)

    def require(self, store: StoreProtocol, key: str) -> None:
        for checked_store, checked_key in self.checks:
            if checked_store is store and checked_key == key:
                return
        self.checks.append((store, key))


class Store:
    """Hierarchical key-value container addressed by colon-delimited paths.

    Each node owns a mapping of keys to values, which may be JSON scalars,
    arrays, plain nested mappings, child stores, or zero-argument producers
    evaluated on every read.

    Permissions are declared per class, either with :class:`Restrict`
    attributes or through the permission registry, and fall back to the
    node's ``default_policy`` for undeclared keys. A child store is its own
    permission domain: paths crossing into it are checked against the
    child, never the parent.

    Example:
        >>> store = Store()
        >>> store.write("user:name", "Ada")
        'Ada'
        >>> store.read("user")
        {'name': 'Ada'}
    """

    # Class-level overrides; fall back to settings when unset
    default_policy: Optional[Permission] = None
    child_store_class: Optional[type] = None
    permission_registry: Optional[PermissionRegistry] = None

    def __init__(
        self,
        default_policy: Optional[Union[Permission, str]] = None,
        settings: Optional[StoreSettings] = None,
    ):
        """Initialize an empty store.

        Args:
            default_policy: Permission for undeclared keys; defaults to the
                class attribute, then ``settings.default_policy``
            settings: Store settings; defaults to the process-wide settings
        """
        self._settings = settings or get_settings()
        self.default_policy = Permission.coerce(
            default_policy or type(self).default_policy or self._settings.default_policy
        )
        self._data: Dict[str, Any] = {}
        self._lock = threading.RLock()
        self._initialize_fields()

    @property
    def settings(self) -> StoreSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------

    def permission_for(self, key: str) -> Permission:
        """Effective permission of ``key`` on this node."""
        registry = self.permission_registry
        if registry is None:
            registry = get_permission_registry()
        return registry.resolve(type(self), key) or self.default_policy

    def allowed_to_read(self, key: str) -> bool:
        return self.permission_for(key).allows_read

    def allowed_to_write(self, key: str) -> bool:
        return self.permission_for(key).allows_write

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self, path: PathLike) -> Any:
        """Read the value at ``path``.

        Producers met along the way are invoked and replaced by their
        result; crossing into a child store delegates to it, and the child
        checks its own permission.

        Args:
            path: Colon-delimited path

        Returns:
            The stored value, or None when nothing is stored there

        Raises:
            PermissionDenied: If the owning node refuses the read
            InvalidPath: If the path is malformed
        """
        store_path = StorePath.parse(path)

        with self._lock:
            head = store_path.head
            if not self.allowed_to_read(head):
                logger.info(f"Read of '{store_path}' denied on {type(self).__name__}")
                raise PermissionDenied.for_read(
                    str(store_path), head, owner=type(self).__name__,
                    permission=self.permission_for(head),
                )

            value = self._materialize(self._data.get(head))
            for segment in store_path.segments[1:]:
                kind = classify_value(value)
                if kind is ValueKind.ABSENT:
                    value = None
                    break

                if kind is ValueKind.CHILD:
                    try:
                        value = value.read(segment)
                    except PermissionDenied as e:
                        raise e.rescoped(str(store_path)) from e
                elif kind is ValueKind.OBJECT:
                    value = value.get(segment)
                elif kind is ValueKind.ARRAY:
                    value = _index_array(value, segment)
                else:
                    value = None

                value = self._materialize(value)

        if self._settings.log_operations:
            logger.debug(f"read {type(self).__name__}['{store_path}']")
        return value

    def try_read(self, path: PathLike) -> AccessResult:
        """Read without raising on denial or a malformed path."""
        try:
            return AccessResult.success(str(path), AccessOperation.READ, self.read(path))
        except (PermissionDenied, InvalidPath) as e:
            return AccessResult.failure(str(path), AccessOperation.READ, e)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(self, path: PathLike, value: Any) -> Any:
        """Write ``value`` at ``path``.

        Missing intermediates are created as plain mappings, or as child
        stores when the segment equals ``settings.child_store_key``.
        Non-empty mappings are decomposed into one write per leaf; empty
        mappings are stored as is.

        Args:
            path: Colon-delimited path
            value: Value to store

        Returns:
            The value written

        Raises:
            PermissionDenied: If a node whose mapping would change refuses
                the write; nothing has been modified in that case
            InvalidPath: If the path is malformed or nests beneath a leaf
            CyclicReference: If the value contains a store on the path
        """
        store_path = StorePath.parse(path)

        with self._lock:
            if is_flattenable(value):
                self.write_entries(value, str(store_path))
            else:
                self._write_value(store_path, value)

        return value

    def try_write(self, path: PathLike, value: Any) -> AccessResult:
        """Write without raising on denial or a malformed path.

        CyclicReference is still raised.
        """
        try:
            return AccessResult.success(str(path), AccessOperation.WRITE, self.write(path, value))
        except (PermissionDenied, InvalidPath) as e:
            return AccessResult.failure(str(path), AccessOperation.WRITE, e)

    def write_entries(self, entries: Dict[str, Any], origin_path: str = "") -> None:
        """Write every leaf of a nested mapping.

        Each leaf at relative path ``P`` becomes ``write(origin_path:P)``.
        All leaves are permission-checked before the first one is applied.

        Args:
            entries: Nested plain mapping
            origin_path: Path the entries are written under

        Raises:
            PermissionDenied: If any leaf write is refused
            CyclicReference: If the mapping contains itself
        """
        if not isinstance(entries, dict):
            raise TypeError(f"entries must be a dict, got {type(entries).__name__}")

        origin = StorePath.parse(origin_path) if origin_path else None

        with self._lock:
            leaves = flatten_entries(entries, origin)
            for leaf_path, leaf_value in leaves:
                self._guard_cycles(leaf_path, leaf_value)
                self._enforce(self._plan_write(leaf_path), leaf_path)

            for leaf_path, leaf_value in leaves:
                self._write_value(leaf_path, leaf_value)

        if self._settings.log_operations:
            logger.debug(
                f"wrote {len(leaves)} entries into {type(self).__name__}['{origin or ''}']"
            )

    def create_child(self, path: PathLike, store: Optional["Store"] = None) -> "Store":
        """Create a child store at ``path`` and return it.

        Args:
            path: Where the child is attached
            store: Existing store to attach; a new one is created when omitted

        Returns:
            The attached child store
        """
        child = store if store is not None else self._spawn_child()
        self.write(path, child)
        return child

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def entries(self) -> Dict[str, Any]:
        """Backing mapping of this node.

        This is the live mapping, not a copy: child stores and producers
        appear as they are stored, and later writes show through.
        """
        return self._data

    def get_field(self, name: str) -> Any:
        """Read a top-level field without a permission check."""
        return self._materialize(self._data.get(name))

    def set_field(self, name: str, value: Any) -> None:
        """Write a top-level field without a permission check."""
        store_path = StorePath.parse(name)
        with self._lock:
            if is_flattenable(value):
                for leaf_path, leaf_value in flatten_entries(value, store_path):
                    self._apply_write(leaf_path, leaf_value, {})
            else:
                self._apply_write(store_path, value, {})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _initialize_fields(self) -> None:
        """Write declared field defaults into this instance."""
        seen = set()
        for klass in type(self).__mro__:
            for name, attribute in vars(klass).items():
                if name in seen or not isinstance(attribute, Restrict):
                    continue
                seen.add(name)
                if attribute.initializes_instances:
                    self.set_field(name, attribute.initial_value())

    def _write_value(self, store_path: StorePath, value: Any) -> None:
        self._guard_cycles(store_path, value)
        plan = self._plan_write(store_path)
        self._enforce(plan, store_path)
        self._apply_write(store_path, value, plan.created)

        if self._settings.log_operations:
            logger.debug(f"wrote {type(self).__name__}['{store_path}']")

    def _plan_write(self, store_path: StorePath) -> _WritePlan:
        """Resolve which (store, key) pairs a write would mutate.

        Nothing is modified. Child stores the write would create are built
        detached so their own policy is consulted.
        """
        plan = _WritePlan()
        owner: StoreProtocol = self
        owner_key = store_path.head
        container: Any = self
        creating = False
        last_index = store_path.depth - 1

        for index, segment in enumerate(store_path.segments):
            if classify_value(container) is ValueKind.CHILD:
                owner, owner_key = container, segment
                if creating:
                    plan.require(owner, owner_key)

            if index == last_index:
                plan.require(owner, owner_key)
                break

            existing = None if creating else _lookup(container, segment)
            kind = classify_value(existing)
            if kind is ValueKind.ABSENT:
                if not creating:
                    plan.require(owner, owner_key)
                    creating = True
                existing = self._new_container(segment)
                plan.created[index] = existing
            elif not kind.is_container:
                raise InvalidPath.not_a_container(str(store_path), segment, kind.value)

            container = existing

        return plan

    def _enforce(self, plan: _WritePlan, store_path: StorePath) -> None:
        for store, key in plan.checks:
            if store.allowed_to_write(key):
                continue

            owner = type(store).__name__
            permission = store.permission_for(key) if isinstance(store, Store) else None
            logger.info(f"Write of '{store_path}' denied: '{key}' on {owner}")
            raise PermissionDenied.for_write(
                str(store_path), key, owner=owner, permission=permission
            )

    def _apply_write(self, store_path: StorePath, value: Any, created: Dict[int, Any]) -> None:
        """Mutation phase of a write whose permissions are settled."""
        container: Any = self

        for index, segment in enumerate(store_path.intermediates):
            current = _lookup(container, segment)
            if classify_value(current) is ValueKind.ABSENT:
                current = created[index] if index in created else self._new_container(segment)
                _assign(container, segment, current)
            container = current

            # The child owns everything below this point
            if classify_value(container) is ValueKind.CHILD and container is not self:
                try:
                    container.write(str(store_path.suffix(index + 1)), value)
                except PermissionDenied as e:
                    raise e.rescoped(str(store_path)) from e
                return

        _assign(container, store_path.leaf, value)

    def _guard_cycles(self, store_path: StorePath, value: Any) -> None:
        if not self._settings.detect_cycles or not may_contain_store(value):
            return

        nodes: List[Any] = [self]
        container: Any = self
        for segment in store_path.intermediates:
            container = _lookup(container, segment)
            kind = classify_value(container)
            if not kind.is_container:
                break
            if kind is ValueKind.CHILD:
                nodes.append(container)

        if contains_any(value, nodes):
            raise CyclicReference(str(store_path))

    def _new_container(self, segment: str) -> Any:
        child_key = self._settings.child_store_key
        if child_key is not None and segment == child_key:
            return self._spawn_child()
        return {}

    def _spawn_child(self) -> "Store":
        child_class = self.child_store_class or Store
        return child_class(settings=self._settings)

    @staticmethod
    def _materialize(value: Any) -> Any:
        while classify_value(value) is ValueKind.LAZY:
            value = value()
        return value

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(keys={list(self._data)!r}, "
            f"default_policy={self.default_policy.value!r})"
        )


def _lookup(container: Any, segment: str) -> Any:
    """Unchecked, materialized lookup of one segment in a container."""
    kind = classify_value(container)
    if kind is ValueKind.CHILD:
        value = container.entries().get(segment)
    elif kind is ValueKind.OBJECT:
        value = container.get(segment)
    else:
        return None
    return Store._materialize(value)


def _assign(container: Any, segment: str, value: Any) -> None:
    if isinstance(container, Store):
        container._data[segment] = value
    else:
        container[segment] = value


def _index_array(array: Any, segment: str) -> Any:
    if not (segment.isascii() and segment.isdigit()):
        return None
    position = int(segment)
    return array[position] if position < len(array) else None
