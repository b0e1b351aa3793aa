"""
Exception hierarchy for Wynn DI.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def type_name(service_type: Any) -> str:
    """Readable name for a service type or generic alias."""
    if isinstance(service_type, type):
        return service_type.__name__
    return str(service_type)


class DIError(Exception):
    """Base class for every error raised by the container."""


class ConfigurationError(DIError):
    """Raised when bindings are declared incorrectly or the container is in the wrong state."""


class MissingBindingError(DIError):
    """Raised when a required binding is not found."""

    def __init__(self, service_type: Any, dependent: Any | None = None):
        self.service_type = service_type
        self.dependent = dependent
        msg = f"No binding found for {type_name(service_type)}"
        if dependent is not None:
            msg += f" (required by {type_name(dependent)} or one of its base classes)"
        super().__init__(msg)


class CircularDependencyError(DIError):
    """Raised when circular dependencies are detected."""

    def __init__(self, cycle: Sequence[Any]):
        self.cycle = list(cycle)
        if self.cycle:
            cycle_str = " -> ".join(type_name(item) for item in self.cycle)
            super().__init__(f"Circular dependency detected: {cycle_str}")
        else:
            super().__init__("Circular dependency detected")


class ConstructionError(DIError):
    """Raised when an implementation type cannot be instantiated without arguments."""

    def __init__(self, implementation_type: type, reason: str):
        self.implementation_type = implementation_type
        super().__init__(f"Cannot construct {type_name(implementation_type)}: {reason}")
