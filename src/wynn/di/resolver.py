"""
Abstract resolver interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class Resolver(ABC):
    """
    Read side of the container.

    An installed container binds itself as the Resolver service, so injected
    objects (Factory[T] among them) can depend on it like any other type.
    """

    @abstractmethod
    def get(self, service_type: type[T] | Any) -> T:
        """
        Get an instance of the given service type.

        Args:
            service_type: The type to resolve

        Returns:
            The cached instance, or a new one for transient bindings

        Raises:
            MissingBindingError: If no binding exists for the requested type
        """

    @abstractmethod
    def inject(self, obj: object) -> None:
        """
        Fill the injectable fields of an object that was not built by the container.

        Args:
            obj: The object whose dependencies should be set
        """

    @abstractmethod
    def has(self, service_type: type[T] | Any) -> bool:
        """Check if a binding exists for the given service type."""
