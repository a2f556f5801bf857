"""
@file interfaces.py
@brief Abstract accessibility backend interface.

Defines the foreign boundary the object model talks to. Every call is
synchronous and blocking; the backend is the sole point of contact with the
live UI tree.
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Hashable, List, Optional, Tuple


class AXError(IntEnum):
    """Status codes returned by the native accessibility API."""

    SUCCESS = 0
    FAILURE = -25200
    ILLEGAL_ARGUMENT = -25201
    INVALID_UI_ELEMENT = -25202
    INVALID_UI_ELEMENT_OBSERVER = -25203
    CANNOT_COMPLETE = -25204
    ATTRIBUTE_UNSUPPORTED = -25205
    ACTION_UNSUPPORTED = -25206
    NOTIFICATION_UNSUPPORTED = -25207
    NOT_IMPLEMENTED = -25208
    NOTIFICATION_ALREADY_REGISTERED = -25209
    NOTIFICATION_NOT_REGISTERED = -25210
    API_DISABLED = -25211
    NO_VALUE = -25212
    PARAMETERIZED_ATTRIBUTE_UNSUPPORTED = -25213
    NOT_ENOUGH_PRECISION = -25214


# Statuses meaning "there is legitimately nothing here" rather than "the call failed".
EMPTY_STATUSES = frozenset({AXError.NO_VALUE, AXError.ATTRIBUTE_UNSUPPORTED})


def status_name(status: int) -> str:
    try:
        return AXError(status).name
    except ValueError:
        return str(status)


class IAccessibilityBackend(ABC):
    """
    Abstract accessibility backend.

    Implementations wrap a platform accessibility service. Handles are opaque
    to the rest of the framework; only the backend knows what they are.
    """

    @abstractmethod
    def copy_attribute_names(self, handle: Any) -> Tuple[int, List[str]]:
        """
        Enumerate the attribute names exposed by an element.

        Args:
            handle: Native element handle

        Returns:
            (status, names)
        """
        pass

    @abstractmethod
    def copy_attribute_value(self, handle: Any, name: str) -> Tuple[int, Any]:
        """
        Copy the current value of a named attribute.

        Args:
            handle: Native element handle
            name: Native attribute name, e.g. "AXRole"

        Returns:
            (status, unwrapped value)
        """
        pass

    @abstractmethod
    def copy_action_names(self, handle: Any) -> Tuple[int, List[str]]:
        """
        Enumerate the action names supported by an element.

        Args:
            handle: Native element handle

        Returns:
            (status, names)
        """
        pass

    @abstractmethod
    def perform_action(self, handle: Any, name: str) -> int:
        """
        Perform a named action on an element.

        Args:
            handle: Native element handle
            name: Native action name, e.g. "AXPress"

        Returns:
            Status code
        """
        pass

    @abstractmethod
    def create_application(self, pid: int) -> Any:
        """
        Create the application root handle for a process id.

        Returns:
            Native handle, or None if the process cannot be resolved
        """
        pass

    @abstractmethod
    def pid_for_name(self, name: str) -> Optional[int]:
        """
        Find the process id owning on-screen windows with the given name.

        Returns:
            Process id, or None
        """
        pass

    def is_process_trusted(self) -> bool:
        """Whether this process may use the accessibility API."""
        return True

    def is_process_alive(self, pid: int) -> bool:
        """Whether a process with this id is running."""
        return True

    def identity(self, handle: Any) -> Hashable:
        """Hashable key identifying the element behind a handle."""
        return handle
