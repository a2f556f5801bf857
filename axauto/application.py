# axauto/application.py
"""
@file application.py
@brief Application root node resolved from a process name or id.
"""

from __future__ import annotations
import logging
from typing import Any, List, Optional, Union

from .cache import CacheSlot
from .config import AXConfig
from .exceptions import (AccessibilityNotTrustedError, ApplicationNotFoundError,
                         AttributeReadError)
from .interfaces import IAccessibilityBackend
from .node import Node

log = logging.getLogger("axauto.application")


def _default_backend() -> IAccessibilityBackend:
    from .bridge import ApplicationServicesBackend
    return ApplicationServicesBackend()


class Application(Node):
    """
    Root node of a running application.

    A number, or a string made only of digits, is taken as a process id;
    any other string is matched against the owner name of on-screen windows.
    """

    def __init__(self, name_or_pid: Union[str, int], backend: Optional[IAccessibilityBackend] = None):
        backend = backend or _default_backend()
        if not backend.is_process_trusted():
            raise AccessibilityNotTrustedError(
                "This process is not trusted for accessibility. Enable it under "
                "System Settings > Privacy & Security > Accessibility."
            )

        pid = self._resolve_pid(name_or_pid, backend)
        if pid is not None and not backend.is_process_alive(pid):
            raise ApplicationNotFoundError(name_or_pid, details=f"no running process with pid {pid}")
        handle = backend.create_application(pid) if pid is not None else None
        if handle is None:
            raise ApplicationNotFoundError(name_or_pid)

        log.info("Resolved application %r to pid %s", name_or_pid, pid)
        self._pid = pid
        self._windows: CacheSlot[List[Node]] = CacheSlot()
        self._first_window: CacheSlot[Optional[Node]] = CacheSlot()
        super().__init__(handle, backend)

    @staticmethod
    def _resolve_pid(name_or_pid: Union[str, int], backend: IAccessibilityBackend) -> Optional[int]:
        if isinstance(name_or_pid, bool):
            raise ApplicationNotFoundError(name_or_pid, details="expected a name or process id")
        if isinstance(name_or_pid, int):
            return name_or_pid
        text = str(name_or_pid).strip()
        if text.isdigit():
            return int(text)
        return backend.pid_for_name(text)

    @property
    def pid(self) -> int:
        return self._pid

    def _query_window_handles(self) -> List[Any]:
        native = f"{AXConfig.current().attribute_prefix}Windows"
        result = self.read_attribute(native)
        if result.failed:
            if AXConfig.current().strict_reads:
                raise AttributeReadError(native, result.status)
            log.warning("Reading %s failed with status %s", native, result.status)
        return list(result.value or [])

    @property
    def windows(self) -> List[Node]:
        """Fresh window nodes. Also replaces the cached windows."""
        return self._windows.store([self._wrap(h) for h in self._query_window_handles()])

    @property
    def cached_windows(self) -> List[Node]:
        if not self._windows.loaded:
            return self.windows
        return self._windows.get()

    @property
    def first_window(self) -> Optional[Node]:
        windows = self.windows
        return self._first_window.store(windows[0] if windows else None)

    @property
    def cached_first_window(self) -> Optional[Node]:
        if not self._first_window.loaded:
            return self.first_window
        return self._first_window.get()

    def invalidate(self) -> None:
        super().invalidate()
        self._windows.invalidate()
        self._first_window.invalidate()

    def __repr__(self) -> str:
        return f"<Application pid={self._pid} title={self.get('title')!r}>"
