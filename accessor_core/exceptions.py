# accessor_core/exceptions.py
"""
@file exceptions.py
@brief Exception classes raised by the accessor registry, compiler and resolver.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional


class AccessorError(Exception):
    """Base exception for the framework."""
    pass


class ConfigError(AccessorError):
    """Raised when a field declaration or object map is invalid."""
    pass


class DuplicateFieldError(AccessorError):
    """
    Raised when a field name is registered twice on the same class,
    or when a generated attribute would shadow an existing one.
    """

    def __init__(self, owner: str, name: str, attribute: Optional[str] = None):
        self.owner = owner
        self.name = name
        self.attribute = attribute
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"DuplicateFieldError: field='{self.name}' owner='{self.owner}'"
        if self.attribute and self.attribute != self.name:
            base += f" attribute='{self.attribute}'"
        return base


class UnknownFieldError(AccessorError):
    """Raised when an accessor is requested for a name absent from the registry."""

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(f"No selector for element '{name}' on '{owner}'")


class ConstructionError(AccessorError):
    """Raised when a fragment is built without a required reference."""

    def __init__(self, owner: str, missing: str):
        self.owner = owner
        self.missing = missing
        super().__init__(f"{owner}: {missing} missing")


class ResolutionError(AccessorError):
    """
    Raised when the driver cannot locate an element.

    Drivers raise it for a failed lookup; the resolver raises it when a
    driver returns no element. Field details are optional since a driver
    only knows the kind and selector it was asked for.
    """

    def __init__(
        self,
        message: str = "element not found",
        *,
        field_name: Optional[str] = None,
        kind: Optional[str] = None,
        selector: Optional[Mapping[str, Any]] = None,
    ):
        self.message = message
        self.field_name = field_name
        self.kind = kind
        self.selector = dict(selector) if selector is not None else None
        super().__init__(self.__str__())

    def __str__(self) -> str:
        parts = [f"ResolutionError: {self.message}"]
        if self.field_name:
            parts.append(f"field='{self.field_name}'")
        if self.kind:
            parts.append(f"kind={self.kind}")
        if self.selector is not None:
            parts.append(f"selector={self.selector}")
        return " ".join(parts)
