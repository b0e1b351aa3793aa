"""
Factory[T] for creating transient instances on demand.
"""

from __future__ import annotations

from typing import Annotated, Any

from .introspection import Inject
from .resolver import Resolver


class Factory[T]:
    """
    Creates a new, fully injected instance of T on every create() call.

    A Factory[T] binding is registered automatically for every transient
    binding of T, so consumers can declare:

        class Consumer:
            connections: Annotated[Factory[Connection], Inject]
    """

    _resolver: Annotated[Resolver, Inject]

    def __init__(self, service_type: Any):
        self._service_type = service_type

    @property
    def service_type(self) -> Any:
        return self._service_type

    def create(self) -> T:
        """Create a new instance of the target type."""
        return self._resolver.get(self._service_type)  # type: ignore[no-any-return]

    def __repr__(self) -> str:
        name = getattr(self._service_type, "__name__", str(self._service_type))
        return f"Factory[{name}]"
