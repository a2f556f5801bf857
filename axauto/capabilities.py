# axauto/capabilities.py
"""
@file capabilities.py
@brief Discovers attributes and actions on a native handle and builds accessors for them.

Attribute getters re-read live state on every call; nothing is cached per
attribute. Action invokers perform the native action and report its status.
"""

from __future__ import annotations
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .actionlogger import ACTION_LOGGER
from .config import AXConfig
from .exceptions import ActionError, AttributeReadError
from .interfaces import EMPTY_STATUSES, AXError, IAccessibilityBackend, status_name

log = logging.getLogger("axauto.capabilities")


@dataclass(frozen=True)
class CallResult:
    """Outcome of one foreign call: the capability name, native status and value."""
    name: str
    status: int
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status == AXError.SUCCESS

    @property
    def empty(self) -> bool:
        """The element legitimately has no value for this attribute."""
        return self.status in EMPTY_STATUSES

    @property
    def failed(self) -> bool:
        return not self.ok and not self.empty


def accessor_name(native_name: str, prefix: Optional[str] = None) -> str:
    """
    Convert a native capability name to its accessor name.

    "AXRoleDescription" -> "roleDescription", "AXPress" -> "press".
    """
    if prefix is None:
        prefix = AXConfig.current().attribute_prefix
    stripped = native_name
    if prefix and native_name.startswith(prefix) and len(native_name) > len(prefix):
        stripped = native_name[len(prefix):]
    return stripped[:1].lower() + stripped[1:]


def snake_case(name: str) -> str:
    """"roleDescription" -> "role_description"."""
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name).lower()


class AttributeGetter:
    """Reads one attribute of one element on demand."""

    kind = "attribute"

    def __init__(self, backend: IAccessibilityBackend, handle: Any, native_name: str, name: str):
        self._backend = backend
        self._handle = handle
        self.native_name = native_name
        self.name = name

    def read(self) -> CallResult:
        """Issue a fresh copy-attribute-value call."""
        status, value = self._backend.copy_attribute_value(self._handle, self.native_name)
        return CallResult(self.native_name, int(status), value if status == AXError.SUCCESS else None)

    def __call__(self) -> Any:
        result = self.read()
        if result.ok:
            return result.value
        if result.empty:
            return None
        if AXConfig.current().strict_reads:
            raise AttributeReadError(self.native_name, result.status)
        log.warning("Reading %s failed: %s", self.native_name, status_name(result.status))
        return None

    def __repr__(self) -> str:
        return f"<AttributeGetter {self.native_name}>"


class ActionInvoker:
    """Performs one action of one element."""

    kind = "action"

    def __init__(self, backend: IAccessibilityBackend, handle: Any, native_name: str, name: str):
        self._backend = backend
        self._handle = handle
        self.native_name = native_name
        self.name = name

    def __call__(self) -> CallResult:
        start = time.time()
        status = int(self._backend.perform_action(self._handle, self.native_name))
        result = CallResult(self.native_name, status)
        ACTION_LOGGER.log(
            event="perform_action",
            name=self.native_name,
            status="ok" if result.ok else "error",
            duration_ms=int((time.time() - start) * 1000),
            metadata={} if result.ok else {"ax_status": status_name(status)},
        )
        if not result.ok and AXConfig.current().strict_actions:
            raise ActionError(self.native_name, status=status)
        return result

    def __repr__(self) -> str:
        return f"<ActionInvoker {self.native_name}>"


def resolve_attributes(backend: IAccessibilityBackend, handle: Any) -> Dict[str, AttributeGetter]:
    """
    Enumerate attribute names on a handle.

    @return mapping of accessor name -> getter, in native enumeration order
    """
    status, names = backend.copy_attribute_names(handle)
    if status != AXError.SUCCESS:
        log.debug("Attribute enumeration failed: %s", status_name(status))
        return {}
    getters: Dict[str, AttributeGetter] = {}
    for native in names:
        name = accessor_name(native)
        getters[name] = AttributeGetter(backend, handle, native, name)
    return getters


def resolve_actions(backend: IAccessibilityBackend, handle: Any) -> Dict[str, ActionInvoker]:
    """
    Enumerate action names on a handle.

    @return mapping of accessor name -> invoker, in native enumeration order
    """
    status, names = backend.copy_action_names(handle)
    if status != AXError.SUCCESS:
        log.debug("Action enumeration failed: %s", status_name(status))
        return {}
    invokers: Dict[str, ActionInvoker] = {}
    for native in names:
        name = accessor_name(native)
        invokers[name] = ActionInvoker(backend, handle, native, name)
    return invokers
