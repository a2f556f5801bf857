# axauto/__init__.py
"""
axauto - object model and search engine over the macOS accessibility tree.

This package provides:
- Node: wrapper around one native element with discovered attributes/actions
- Application: root node resolved from an application name or pid
- Locator: ordinal, predicate-based pre-order search with ancestry
- Path generation: bake a located ancestry into a replayable index path
- Manifests: record capabilities per role and generate typed wrappers
"""

from axauto.application import Application
from axauto.cache import CacheSlot, CacheState
from axauto.capabilities import (ActionInvoker, AttributeGetter, CallResult,
                                 resolve_actions, resolve_attributes)
from axauto.config import AXConfig
from axauto.exceptions import (
    AXAutoError,
    ConfigError,
    AccessibilityNotTrustedError,
    ApplicationNotFoundError,
    AttributeReadError,
    ActionError,
    UnsupportedOperatorError,
)
from axauto.interfaces import AXError, IAccessibilityBackend
from axauto.node import Node
from axauto.pathgen import (PathStep, describe_ancestry, generate_path_function,
                            render_path_function, replay_path)

__all__ = [
    "Application",
    "Node",
    "CacheSlot",
    "CacheState",
    "AttributeGetter",
    "ActionInvoker",
    "CallResult",
    "resolve_attributes",
    "resolve_actions",
    "AXConfig",
    "AXError",
    "IAccessibilityBackend",
    "AXAutoError",
    "ConfigError",
    "AccessibilityNotTrustedError",
    "ApplicationNotFoundError",
    "AttributeReadError",
    "ActionError",
    "UnsupportedOperatorError",
    "PathStep",
    "describe_ancestry",
    "generate_path_function",
    "render_path_function",
    "replay_path",
]

__version__ = "1.0.0"
