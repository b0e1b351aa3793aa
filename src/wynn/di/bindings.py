"""
Binding definitions and types for Wynn DI.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import type_name


class Lifetime(Enum):
    """How long a resolved instance lives."""

    CACHED = "cached"
    TRANSIENT = "transient"


class Trigger(Enum):
    """When a binding is resolved."""

    ON_INSTALL = "on_install"
    ON_REQUEST = "on_request"


@dataclass(frozen=True, eq=False)
class Binding:
    """
    A completed dependency injection binding.

    Bindings compare by identity: two bindings with the same implementation
    but different service types are different nodes of the dependency graph.
    """

    service_type: Any
    implementation_type: type
    creation: Callable[[], Any]
    lifetime: Lifetime
    trigger: Trigger

    @property
    def is_cached(self) -> bool:
        return self.lifetime is Lifetime.CACHED

    @property
    def is_transient(self) -> bool:
        return self.lifetime is Lifetime.TRANSIENT

    def __str__(self) -> str:
        return (
            f"{type_name(self.service_type)} -> {type_name(self.implementation_type)}"
            f" ({self.lifetime.value}, {self.trigger.value})"
        )
