# axauto/comparators.py
"""
Closed set of comparison operators for attribute filters.

Operators are looked up in a fixed table of functions; nothing outside the
table is ever evaluated.
"""

from __future__ import annotations
import operator
from typing import Any, Callable, Dict

from .exceptions import UnsupportedOperatorError


def _ordered(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    # None and mixed types never order against anything
    def compare(left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        try:
            return bool(op(left, right))
        except TypeError:
            return False
    compare.__name__ = op.__name__
    return compare


COMPARATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": _ordered(operator.lt),
    ">": _ordered(operator.gt),
    "<=": _ordered(operator.le),
    ">=": _ordered(operator.ge),
}

# Alternative spellings accepted for the operators above.
ALIASES: Dict[str, str] = {
    "===": "==",
    "!==": "!=",
    "eq": "==",
    "ne": "!=",
    "lt": "<",
    "gt": ">",
    "le": "<=",
    "ge": ">=",
}


def get_comparator(op: str) -> Callable[[Any, Any], bool]:
    """Return the comparator for op or raise UnsupportedOperatorError."""
    key = ALIASES.get(op, op) if isinstance(op, str) else op
    try:
        return COMPARATORS[key]
    except (KeyError, TypeError):
        raise UnsupportedOperatorError(op, supported=sorted(COMPARATORS)) from None


def compare(left: Any, op: str, right: Any) -> bool:
    return bool(get_comparator(op)(left, right))
