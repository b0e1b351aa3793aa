"""
Fluent DSL for declaring bindings.

A declaration moves through fixed stages, one builder class per stage:

    container.bind(Service).to_new(ServiceImpl).as_cached().on_install()
    container.bind(Config).to_constant(config).as_cached().on_request()
    container.bind(Connection).to_new().as_transient().on_request()

Only the last call hands a complete Binding to the container.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any

from .bindings import Binding, Lifetime, Trigger
from .errors import ConfigurationError, type_name
from .introspection import Constructor

if TYPE_CHECKING:
    from .container import Container


class ModuleDef(ABC):
    """
    A group of related binding declarations.

    Subclasses declare their bindings in configure(); Container.create()
    applies modules in the order given.
    """

    @abstractmethod
    def configure(self, container: Container) -> None:
        """Declare bindings on the container."""


class Declaration:
    """Mutable state of one binding declaration in progress."""

    def __init__(self, container: Container, service_type: Any):
        self.container = container
        self.service_type = service_type
        self.implementation_type: type | None = None
        self.creation: Callable[[], Any] | None = None
        self.lifetime: Lifetime | None = None
        self.trigger: Trigger | None = None
        self.closed = False

    def ensure_open(self) -> None:
        if self.closed:
            raise ConfigurationError(
                f"The declaration for {type_name(self.service_type)} is already closed"
            )

    def fail(self, message: str) -> ConfigurationError:
        """Abandon this declaration and build the error to raise."""
        self.closed = True
        self.container._abort_declaration(self)
        return ConfigurationError(message)

    def set_implementation(self, implementation_type: Any, creation: Callable[[], Any]) -> None:
        self.ensure_open()
        self._validate_implementation_type(implementation_type)
        self.implementation_type = implementation_type
        self.creation = creation

    def _validate_implementation_type(self, implementation_type: Any) -> None:
        service = type_name(self.service_type)

        if not inspect.isclass(implementation_type):
            raise self.fail(
                f"Implementation of {service} must be a class, got {implementation_type!r}"
            )

        if inspect.isabstract(implementation_type):
            raise self.fail(
                f"Implementation of {service} must be concrete, "
                f"{implementation_type.__name__} is abstract"
            )

        if (
            isinstance(self.service_type, type)
            and implementation_type is not self.service_type
            and issubclass(self.service_type, implementation_type)
        ):
            raise self.fail(
                f"{implementation_type.__name__} is a base class of {service} "
                "and cannot implement it"
            )

    def complete(self) -> None:
        self.ensure_open()
        missing = [
            name
            for name in ("implementation_type", "creation", "lifetime", "trigger")
            if getattr(self, name) is None
        ]
        if missing:
            raise self.fail(
                f"Binding for {type_name(self.service_type)} is incomplete, "
                f"missing: {', '.join(missing)}"
            )

        assert self.implementation_type is not None
        assert self.creation is not None
        assert self.lifetime is not None
        assert self.trigger is not None

        binding = Binding(
            self.service_type,
            self.implementation_type,
            self.creation,
            self.lifetime,
            self.trigger,
        )
        self.closed = True
        self.container._complete_declaration(self, binding)


class BindingBuilder:
    """Chooses how the service is constructed."""

    def __init__(self, declaration: Declaration):
        self._declaration = declaration

    def to_new(self, implementation_type: type | None = None) -> LifetimeBuilder:
        """Construct a new instance of implementation_type (default: the service type)."""
        declaration = self._declaration
        impl = declaration.service_type if implementation_type is None else implementation_type
        declaration.set_implementation(impl, partial(Constructor.construct, impl))
        return LifetimeBuilder(declaration)

    def to_constant(self, value: Any) -> CachedLifetimeBuilder:
        """Always resolve to the given value."""
        declaration = self._declaration
        declaration.ensure_open()
        if value is None:
            raise declaration.fail(
                f"Constant for {type_name(declaration.service_type)} must not be None"
            )

        declaration.set_implementation(type(value), lambda: value)
        declaration.lifetime = Lifetime.CACHED
        return CachedLifetimeBuilder(declaration)


class CachedLifetimeBuilder:
    """Lifetime stage for declarations that can only be cached."""

    def __init__(self, declaration: Declaration):
        self._declaration = declaration

    def as_cached(self) -> TriggerBuilder:
        """Construct one instance and share it for the life of the container."""
        self._declaration.ensure_open()
        self._declaration.lifetime = Lifetime.CACHED
        return TriggerBuilder(self._declaration)


class LifetimeBuilder(CachedLifetimeBuilder):
    """Chooses how long resolved instances live."""

    def as_transient(self) -> RequestTriggerBuilder:
        """
        Construct a new instance on every resolution.

        Also makes Factory[T] resolvable for the service type T.
        """
        self._declaration.ensure_open()
        self._declaration.lifetime = Lifetime.TRANSIENT
        return RequestTriggerBuilder(self._declaration)


class RequestTriggerBuilder:
    """Trigger stage for declarations that can only resolve on request."""

    def __init__(self, declaration: Declaration):
        self._declaration = declaration

    def on_request(self) -> None:
        """Resolve lazily, on first use."""
        self._declaration.ensure_open()
        self._declaration.trigger = Trigger.ON_REQUEST
        self._declaration.complete()


class TriggerBuilder(RequestTriggerBuilder):
    """Chooses when the binding is resolved."""

    def on_install(self) -> None:
        """Resolve eagerly when the container is installed."""
        self._declaration.ensure_open()
        self._declaration.trigger = Trigger.ON_INSTALL
        self._declaration.complete()
