# axauto/exceptions.py
"""
@file exceptions.py
@brief Exception types for the accessibility object model.
"""

from __future__ import annotations
from typing import Any, Optional


class AXAutoError(Exception):
    """Base exception for the framework."""


class ConfigError(AXAutoError):
    """Raised when a settings file or capability manifest is invalid."""


class AccessibilityNotTrustedError(AXAutoError):
    """Raised when the process is not allowed to use the accessibility API."""


class ApplicationNotFoundError(AXAutoError):
    def __init__(self, identifier: Any, details: Optional[str] = None):
        self.identifier = identifier
        self.details = details
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"ApplicationNotFoundError: could not find application for {self.identifier!r}"
        if self.details:
            base += f" details='{self.details}'"
        return base


class AttributeReadError(AXAutoError):
    """
    Raised when copying an attribute value fails for a reason other than
    the attribute having no value.
    """

    def __init__(self, attribute: str, status: int, element: Optional[str] = None):
        self.attribute = attribute
        self.status = status
        self.element = element
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"AttributeReadError: attribute='{self.attribute}' status={self.status}"
        if self.element:
            base += f" element='{self.element}'"
        return base


class ActionError(AXAutoError):
    def __init__(
        self,
        action: str,
        status: Optional[int] = None,
        element: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.action = action
        self.status = status
        self.element = element
        self.cause = cause
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"ActionError: action='{self.action}'"
        if self.status is not None:
            base += f" status={self.status}"
        if self.element:
            base += f" element='{self.element}'"
        if self.cause:
            base += f" cause='{type(self.cause).__name__}: {self.cause}'"
        return base


class UnsupportedOperatorError(AXAutoError, ValueError):
    def __init__(self, operator: Any, supported: Optional[list] = None):
        self.operator = operator
        self.supported = supported or []
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"UnsupportedOperatorError: operator={self.operator!r}"
        if self.supported:
            base += f" supported={self.supported}"
        return base
