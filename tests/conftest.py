# tests/conftest.py
"""
Shared fixtures: an in-memory accessibility backend.

Trees are described with el(); every FakeElement is a native handle.
"""

from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

import pytest

from axauto.actionlogger import ACTION_LOGGER
from axauto.config import AXConfig
from axauto.interfaces import AXError, IAccessibilityBackend


class FakeElement:
    """Stand-in for a native element handle."""

    def __init__(self, attributes: Dict[str, Any], actions: List[str], children: List["FakeElement"]):
        self.attributes = attributes
        self.actions = actions
        self.children = children

    def __repr__(self) -> str:
        return f"FakeElement({self.attributes.get('AXRole')!r}, {self.attributes.get('AXDescription')!r})"


def el(role: str, description: Optional[str] = None, *children: FakeElement,
       actions: Tuple[str, ...] = (), **extra: Any) -> FakeElement:
    attributes: Dict[str, Any] = {"AXRole": role}
    if description is not None:
        attributes["AXDescription"] = description
    for key, value in extra.items():
        attributes[key if key.startswith("AX") else f"AX{key}"] = value
    return FakeElement(attributes, list(actions), list(children))


class FakeBackend(IAccessibilityBackend):
    """Answers native calls from FakeElement trees and counts them."""

    def __init__(self, apps: Optional[Dict[int, FakeElement]] = None, names: Optional[Dict[str, int]] = None):
        self.apps = apps or {}
        self.names = names or {}
        self.calls: Counter = Counter()
        self.failures: Dict[Tuple[int, str], int] = {}
        self.performed: List[Tuple[FakeElement, str]] = []
        self.trusted = True
        self.dead_pids: set = set()

    def fail(self, element: FakeElement, name: str, status: int = AXError.CANNOT_COMPLETE) -> None:
        self.failures[(id(element), name)] = int(status)

    def copy_attribute_names(self, handle):
        self.calls["copy_attribute_names"] += 1
        return AXError.SUCCESS, ["AXChildren"] + list(handle.attributes)

    def copy_attribute_value(self, handle, name):
        self.calls["copy_attribute_value"] += 1
        self.calls[f"copy_attribute_value:{name}"] += 1
        status = self.failures.get((id(handle), name))
        if status is not None:
            return status, None
        if name == "AXChildren":
            return AXError.SUCCESS, list(handle.children)
        if name not in handle.attributes:
            return AXError.ATTRIBUTE_UNSUPPORTED, None
        value = handle.attributes[name]
        if value is None:
            return AXError.NO_VALUE, None
        return AXError.SUCCESS, value

    def copy_action_names(self, handle):
        self.calls["copy_action_names"] += 1
        return AXError.SUCCESS, list(handle.actions)

    def perform_action(self, handle, name):
        self.calls["perform_action"] += 1
        status = self.failures.get((id(handle), name))
        if status is not None:
            return status
        if name not in handle.actions:
            return AXError.ACTION_UNSUPPORTED
        self.performed.append((handle, name))
        return AXError.SUCCESS

    def create_application(self, pid):
        return self.apps.get(pid)

    def pid_for_name(self, name):
        return self.names.get(name)

    def is_process_trusted(self):
        return self.trusted

    def is_process_alive(self, pid):
        return pid not in self.dead_pids


@pytest.fixture(autouse=True)
def _reset_state():
    AXConfig.reset_to_defaults()
    ACTION_LOGGER.disable()
    yield
    AXConfig.reset_to_defaults()
    ACTION_LOGGER.disable()


@pytest.fixture
def backend():
    return FakeBackend()


def build_control_center() -> FakeElement:
    """
    Control Center shaped tree, pre-order positions on the left:

        0 AXApplication "Control Center"
        1   AXMenuBar
        2     AXMenuBarItem "Control Center" [AXPress]
        3     AXMenuBarItem "Sound"          [AXPress, AXShowMenu]
        4   AXWindow
        5     AXGroup
        6       AXCheckBox "Wi-Fi"           [AXPress]
        7       AXSlider   "Volume"          [AXIncrement, AXDecrement]
        8     AXButton "Sound"               [AXPress]
    """
    window = el(
        "AXWindow", None,
        el(
            "AXGroup", None,
            el("AXCheckBox", "Wi-Fi", actions=("AXPress",), Value=1),
            el("AXSlider", "Volume", actions=("AXIncrement", "AXDecrement"), Value=40),
            RoleDescription="group",
        ),
        el("AXButton", "Sound", actions=("AXPress",), RoleDescription="button"),
        RoleDescription="standard window",
    )
    return el(
        "AXApplication", "Control Center",
        el(
            "AXMenuBar", None,
            el("AXMenuBarItem", "Control Center", actions=("AXPress",), RoleDescription="menu bar item"),
            el("AXMenuBarItem", "Sound", actions=("AXPress", "AXShowMenu"), RoleDescription="menu bar item"),
            RoleDescription="menu bar",
        ),
        window,
        RoleDescription="application",
        Title="Control Center",
        Windows=[window],
    )


@pytest.fixture
def control_center():
    return build_control_center()


@pytest.fixture
def cc_backend(control_center):
    return FakeBackend(apps={42: control_center}, names={"Control Center": 42})
