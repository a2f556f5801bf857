# axauto/cache.py
"""Explicit tri-state cache slot for navigation results."""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class CacheState(Enum):
    NOT_LOADED = "not_loaded"
    LOADED_EMPTY = "loaded_empty"
    LOADED = "loaded"


class CacheSlot(Generic[T]):
    """
    Holds one cached navigation result.

    An empty sequence or None is a resolved value (LOADED_EMPTY), distinct
    from never having been resolved (NOT_LOADED). Nothing invalidates the
    slot except an explicit store() or invalidate().
    """

    __slots__ = ("_state", "_value")

    def __init__(self) -> None:
        self._state = CacheState.NOT_LOADED
        self._value: Optional[T] = None

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._state is not CacheState.NOT_LOADED

    def store(self, value: T) -> T:
        self._value = value
        self._state = CacheState.LOADED_EMPTY if _is_empty(value) else CacheState.LOADED
        return value

    def get(self) -> Optional[T]:
        if self._state is CacheState.NOT_LOADED:
            raise LookupError("cache slot not loaded")
        return self._value

    def get_or_load(self, loader: Callable[[], T]) -> T:
        if self._state is CacheState.NOT_LOADED:
            return self.store(loader())
        return self._value

    def invalidate(self) -> None:
        self._state = CacheState.NOT_LOADED
        self._value = None

    def __repr__(self) -> str:
        return f"<CacheSlot {self._state.value}>"


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False
