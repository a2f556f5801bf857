# axauto/locator.py
"""
@file locator.py
@brief Predicate-based search over a node's cached subtree.

Searches walk the tree depth-first in pre-order (a node before its children,
children in index order) and count matches globally across the whole walk.
The Nth match ends the search and its full ancestry is returned, root first.
"""

from __future__ import annotations
import logging
import re
import time
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from .actionlogger import ACTION_LOGGER
from .comparators import get_comparator
from .config import AXConfig

if TYPE_CHECKING:
    from .node import Node

log = logging.getLogger("axauto.locator")

Predicate = Callable[["Node"], Any]

# Reserved default telling the two-argument form of first_child_where apart.
_UNSET = object()


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


def stringify(value: Any) -> str:
    return "" if value is None else str(value)


def like(pattern: str) -> Callable[[Any], bool]:
    """Case-insensitive, unanchored regex test against a stringified value."""
    rx = re.compile(pattern, re.IGNORECASE)
    return lambda value: rx.search(stringify(value)) is not None


class LocatorMixin:
    """Search operations shared by every node type."""

    def locate(self, predicate: Predicate, ordinal: int = 1) -> Optional[List["Node"]]:
        """
        Find the ordinal-th node satisfying predicate, self included.

        @param predicate Called once per visited node
        @param ordinal 1-based match number, counted across the whole walk
        @return ancestry from self down to the match, or None if fewer matches exist
        """
        if ordinal < 1:
            raise ValueError(f"ordinal must be >= 1, got {ordinal}")

        guard = AXConfig.current().cycle_guard
        seen = set()
        found = 0
        visited = 0
        start = time.time()
        result: Optional[List["Node"]] = None

        stack: List[List["Node"]] = [[self]]
        while stack:
            ancestry = stack.pop()
            node = ancestry[-1]
            if guard:
                key = node.identity
                if key in seen:
                    log.debug("Skipping already visited element %r", node)
                    continue
                seen.add(key)

            visited += 1
            if predicate(node):
                found += 1
                if found == ordinal:
                    result = ancestry
                    break

            for child in reversed(node.cached_children):
                stack.append(ancestry + [child])

        if ACTION_LOGGER.is_enabled():
            ACTION_LOGGER.log(
                event="locate",
                element=repr(self),
                status="ok" if result else "not_found",
                duration_ms=int((time.time() - start) * 1000),
                metadata={"ordinal": ordinal, "matches": found, "visited": visited},
            )
        return result

    def locate_where_like(self, property: str, pattern: str, ordinal: int = 1) -> Optional[List["Node"]]:
        """Locate a node whose property value, as text, contains a match for pattern."""
        test = like(pattern)
        return self.locate(lambda node: test(node.get(property)), ordinal)

    def locate_where_has_action_like(self, name: str, ordinal: int = 1) -> Optional[List["Node"]]:
        """Locate a node having an action whose name matches name."""
        return self.locate(lambda node: node.first_action_like(name, None) is not None, ordinal)

    def children_having_like(self, property: str, pattern: str) -> List["Node"]:
        """
        For each direct child, the deepest node of the first match in that
        child's subtree. Children without a match are dropped.
        """
        matches = []
        for child in self.children:
            ancestry = child.locate_where_like(property, pattern)
            if ancestry:
                matches.append(ancestry[-1])
        return matches

    def children_having_action_like(self, name: str) -> List["Node"]:
        matches = []
        for child in self.children:
            ancestry = child.locate_where_has_action_like(name)
            if ancestry:
                matches.append(ancestry[-1])
        return matches

    def first_child_where(self, property: str, value_or_operator: Any, value: Any = _UNSET) -> Optional["Node"]:
        """
        First direct child whose property compares true against a value.

        first_child_where("role", "AXButton") tests equality;
        first_child_where("size", ">=", 3) uses the given operator.
        """
        if value is _UNSET:
            op, expected = "==", value_or_operator
        else:
            op, expected = value_or_operator, value
        comparator = get_comparator(op)

        for child in self.cached_children:
            if comparator(child.get(property), expected):
                return child
        return None

    def first_child_where_like(self, property: str, pattern: str) -> Optional["Node"]:
        test = like(pattern)
        for child in self.cached_children:
            if test(child.get(property)):
                return child
        return None

    def first_child_where_has_action_like(self, name: str) -> Optional["Node"]:
        for child in self.cached_children:
            if child.first_action_like(name, None) is not None:
                return child
        return None

    def first_action_like(self, name: str, fallback: Any = _noop) -> Any:
        """
        Invoker of the first action whose accessor name ("showMenu" for
        AXShowMenu) matches name, case-insensitively; fallback when none does.
        """
        rx = re.compile(name, re.IGNORECASE)
        for key, invoker in self.actions.items():
            if rx.search(key):
                return invoker
        return fallback
