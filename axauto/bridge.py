# axauto/bridge.py
"""ApplicationServices (pyobjc) implementation of the accessibility backend."""

from __future__ import annotations
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from .interfaces import AXError, IAccessibilityBackend

try:
    from ApplicationServices import (
        AXIsProcessTrusted,
        AXUIElementCopyActionNames,
        AXUIElementCopyAttributeNames,
        AXUIElementCopyAttributeValue,
        AXUIElementCreateApplication,
        AXUIElementPerformAction,
        AXValueGetType,
        AXValueGetValue,
        kAXValueCGPointType,
        kAXValueCGRectType,
        kAXValueCGSizeType,
    )
    from Quartz import (
        CGWindowListCopyWindowInfo,
        kCGNullWindowID,
        kCGWindowListExcludeDesktopElements,
    )
    PYOBJC_AVAILABLE = True
except ImportError:
    PYOBJC_AVAILABLE = False


def _unpack(result: Any) -> Tuple[int, Any]:
    # pyobjc returns (err, out) for functions with an output pointer
    if isinstance(result, tuple) and len(result) == 2:
        return int(result[0]), result[1]
    return int(AXError.SUCCESS), result


def _pid_alive(pid: int) -> bool:
    if int(pid) <= 0:
        return False
    try:
        os.kill(int(pid), 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # exists, owned by another user
        return True
    return True


class ApplicationServicesBackend(IAccessibilityBackend):
    """
    macOS accessibility backend using the AXUIElement API through pyobjc.

    Values are unwrapped to plain Python types: arrays become lists, AXValue
    geometry payloads become dicts, strings and numbers pass through.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        if not PYOBJC_AVAILABLE:
            raise ImportError(
                "pyobjc is required for macOS accessibility automation. "
                "Install with: pip install pyobjc-framework-ApplicationServices pyobjc-framework-Quartz"
            )
        self.log = logger or logging.getLogger("axauto.bridge")

    def is_process_trusted(self) -> bool:
        return bool(AXIsProcessTrusted())

    def copy_attribute_names(self, handle: Any) -> Tuple[int, List[str]]:
        err, names = _unpack(AXUIElementCopyAttributeNames(handle, None))
        if err != AXError.SUCCESS or names is None:
            return err, []
        return err, [str(n) for n in names]

    def copy_attribute_value(self, handle: Any, name: str) -> Tuple[int, Any]:
        err, value = _unpack(AXUIElementCopyAttributeValue(handle, name, None))
        if err != AXError.SUCCESS:
            return err, None
        return err, self._unwrap(value)

    def copy_action_names(self, handle: Any) -> Tuple[int, List[str]]:
        err, names = _unpack(AXUIElementCopyActionNames(handle, None))
        if err != AXError.SUCCESS or names is None:
            return err, []
        return err, [str(n) for n in names]

    def perform_action(self, handle: Any, name: str) -> int:
        return int(AXUIElementPerformAction(handle, name))

    def is_process_alive(self, pid: int) -> bool:
        return _pid_alive(pid)

    def create_application(self, pid: int) -> Any:
        # AXUIElementCreateApplication hands out a handle for any integer
        if not _pid_alive(pid):
            return None
        return AXUIElementCreateApplication(int(pid))

    def pid_for_name(self, name: str) -> Optional[int]:
        windows = CGWindowListCopyWindowInfo(
            kCGWindowListExcludeDesktopElements, kCGNullWindowID,
        ) or []
        for w in windows:
            if w.get("kCGWindowOwnerName") == name:
                pid = w.get("kCGWindowOwnerPID")
                if pid:
                    return int(pid)
        self.log.debug("No on-screen window owned by %r", name)
        return None

    def _unwrap(self, value: Any) -> Any:
        if value is None or isinstance(value, (str, bool, int, float)):
            return value
        if isinstance(value, (list, tuple)) or hasattr(value, "objectAtIndex_"):
            return [self._unwrap(v) for v in value]
        geometry = self._unwrap_geometry(value)
        if geometry is not None:
            return geometry
        return value

    @staticmethod
    def _unwrap_geometry(value: Any) -> Optional[Dict[str, float]]:
        try:
            kind = AXValueGetType(value)
        except (TypeError, ValueError):
            return None

        if kind == kAXValueCGPointType:
            ok, p = AXValueGetValue(value, kind, None)
            return {"x": float(p.x), "y": float(p.y)} if ok else None
        if kind == kAXValueCGSizeType:
            ok, s = AXValueGetValue(value, kind, None)
            return {"width": float(s.width), "height": float(s.height)} if ok else None
        if kind == kAXValueCGRectType:
            ok, r = AXValueGetValue(value, kind, None)
            if not ok:
                return None
            return {
                "x": float(r.origin.x),
                "y": float(r.origin.y),
                "width": float(r.size.width),
                "height": float(r.size.height),
            }
        return None
