# axauto/node.py
"""
@file node.py
@brief Object model wrapping one native accessibility element.
"""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Any, Dict, Hashable, List, Mapping, Optional, Union

from .cache import CacheSlot
from .capabilities import (ActionInvoker, AttributeGetter, CallResult,
                           resolve_actions, resolve_attributes, snake_case)
from .config import AXConfig
from .exceptions import ActionError, AttributeReadError
from .interfaces import EMPTY_STATUSES, AXError, IAccessibilityBackend, status_name
from .locator import LocatorMixin

log = logging.getLogger("axauto.node")

# Accessor names never bound as attributes; the node's own navigation members own them.
RESERVED_MEMBERS = frozenset({"children", "windows", "actions"})

Capability = Union[AttributeGetter, ActionInvoker]


class Node(LocatorMixin):
    """
    Wrapper around one native element handle.

    Attributes and actions discovered at construction are reachable as
    members: node.role reads AXRole live, node.press is the AXPress invoker.
    Children are exposed uncached (children, first_child: re-query and
    allocate new nodes every time) and cached (cached_children,
    cached_first_child: resolved once, then returned unchanged until the
    uncached accessor runs again or invalidate() is called).

    The node does not own the element; the OS may destroy it at any time.
    """

    def __init__(self, handle: Any, backend: IAccessibilityBackend):
        self._handle = handle
        self._backend = backend
        self._children: CacheSlot[List[Node]] = CacheSlot()
        self._first_child: CacheSlot[Optional[Node]] = CacheSlot()

        self._attributes: Dict[str, AttributeGetter] = {
            name: getter
            for name, getter in resolve_attributes(backend, handle).items()
            if name not in RESERVED_MEMBERS
        }
        self._actions: Dict[str, ActionInvoker] = resolve_actions(backend, handle)
        self._lookup: Dict[str, Capability] = self._build_lookup()

    def _build_lookup(self) -> Dict[str, Capability]:
        lookup: Dict[str, Capability] = {}
        members = set(dir(type(self)))
        for mapping in (self._attributes, self._actions):
            for name, capability in mapping.items():
                for alias in (name, snake_case(name), capability.native_name):
                    if alias in members:
                        log.debug("Not binding %s: clashes with a Node member", alias)
                        continue
                    lookup[alias] = capability
        return lookup

    # --- Capability surface ---

    @property
    def handle(self) -> Any:
        """The underlying native element."""
        return self._handle

    @property
    def backend(self) -> IAccessibilityBackend:
        return self._backend

    @property
    def identity(self) -> Hashable:
        key = self._backend.identity(self._handle)
        try:
            hash(key)
        except TypeError:
            return id(self._handle)
        return key

    @property
    def attributes(self) -> Mapping[str, AttributeGetter]:
        """Discovered attributes, accessor name -> getter."""
        return MappingProxyType(self._attributes)

    @property
    def actions(self) -> Mapping[str, ActionInvoker]:
        """Discovered actions, accessor name -> invoker."""
        return MappingProxyType(self._actions)

    @property
    def attribute_names(self) -> List[str]:
        """Native names of the discovered attributes."""
        return [g.native_name for g in self._attributes.values()]

    @property
    def action_names(self) -> List[str]:
        return [a.native_name for a in self._actions.values()]

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        lookup = self.__dict__.get("_lookup")
        capability = lookup.get(name) if lookup else None
        if capability is None:
            raise AttributeError(f"{type(self).__name__} has no capability {name!r}")
        if capability.kind == "attribute":
            return capability()
        return capability

    def __dir__(self) -> List[str]:
        names = set(super().__dir__())
        names.update(self._attributes)
        names.update(self._actions)
        return sorted(names)

    def get(self, name: str, default: Any = None) -> Any:
        """Live value of an attribute, or default when the node does not expose it."""
        capability = self._lookup.get(name)
        if capability is None or capability.kind != "attribute":
            return default
        value = capability()
        return default if value is None else value

    def read_attribute(self, name: str) -> CallResult:
        """
        Read an attribute and report the native status alongside the value.

        Accepts an accessor name ("roleDescription") or a native name
        ("AXRoleDescription"); native names are read even if not discovered.
        """
        capability = self._lookup.get(name)
        if capability is not None and capability.kind == "attribute":
            return capability.read()
        status, value = self._backend.copy_attribute_value(self._handle, name)
        return CallResult(name, int(status), value if status == AXError.SUCCESS else None)

    def perform(self, name: str) -> CallResult:
        """Perform an action by accessor or native name."""
        capability = self._lookup.get(name)
        if capability is None or capability.kind != "action":
            raise ActionError(name, status=int(AXError.ACTION_UNSUPPORTED), element=repr(self))
        return capability()

    # --- Navigation ---

    def _query_child_handles(self) -> List[Any]:
        native = f"{AXConfig.current().attribute_prefix}Children"
        status, handles = self._backend.copy_attribute_value(self._handle, native)
        if status == AXError.SUCCESS:
            return list(handles or [])
        if status in EMPTY_STATUSES:
            return []
        if AXConfig.current().strict_reads:
            raise AttributeReadError(native, int(status))
        log.warning("Reading %s failed: %s", native, status_name(status))
        return []

    def _wrap(self, handle: Any) -> Node:
        return Node(handle, self._backend)

    @property
    def children(self) -> List[Node]:
        """Fresh child nodes. Also replaces the cached children."""
        return self._children.store([self._wrap(h) for h in self._query_child_handles()])

    @property
    def cached_children(self) -> List[Node]:
        """Child nodes as first resolved; the same list on every access."""
        if not self._children.loaded:
            return self.children
        return self._children.get()

    @property
    def first_child(self) -> Optional[Node]:
        """Fresh first child node or None. Also replaces the cached first child."""
        handles = self._query_child_handles()
        return self._first_child.store(self._wrap(handles[0]) if handles else None)

    @property
    def cached_first_child(self) -> Optional[Node]:
        if not self._first_child.loaded:
            return self.first_child
        return self._first_child.get()

    def invalidate(self) -> None:
        """Forget cached children and first child; the next cached access re-queries."""
        self._children.invalidate()
        self._first_child.invalidate()

    def traverse(self, role: str, depth: int = 1) -> Node:
        """
        Descend up to depth levels, each time into the first cached child
        whose role matches role. Stops at the deepest node found.
        """
        node = self
        for _ in range(depth):
            child = node.first_child_where_like("role", role)
            if child is None:
                break
            node = child
        return node

    # --- Identity ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        role = self.get("role")
        description = self.get("description")
        if description:
            return f"<{type(self).__name__} role={role!r} description={description!r}>"
        return f"<{type(self).__name__} role={role!r}>"
