"""
Container - binding registry and resolution engine.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from functools import partial
from typing import Any, TypeVar

from .bindings import Binding, Lifetime, Trigger
from .cache import BindingCache
from .core import BindingBuilder, Declaration, ModuleDef
from .errors import CircularDependencyError, ConfigurationError, type_name
from .factory import Factory
from .graph import check_circular_dependencies, topological_order
from .introspection import Constructor
from .lifecycle import run_initialize
from .resolver import Resolver

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container(Resolver):
    """
    Dependency injection container.

    The container is open for bind() declarations until install() seals it.
    After that, get() and inject() resolve object graphs on demand: cached
    bindings are constructed once and shared, transient ones are constructed
    on every request. Bindings triggered on install are resolved eagerly by
    install(), in declaration order.

    validate() may be called before install() to surface missing bindings,
    circular dependencies and construction failures early. It resolves every
    binding, so cached instances it creates are kept and reused after install.

    Example:
        ```python
        container = Container.create()
        container.bind(Repository).to_new(SqlRepository).as_cached().on_install()
        container.bind(Handler).to_new().as_transient().on_request()
        container.validate()
        container.install()

        handler = container.get(Handler)
        ```
    """

    def __init__(self) -> None:
        self._cache = BindingCache()
        self._instances: dict[Binding, Any] = {}
        self._installed = False
        self._pending: Declaration | None = None
        self._resolving: list[Binding] = []
        self._lock = threading.RLock()

        self.bind(Resolver).to_constant(self).as_cached().on_request()

    @classmethod
    def create(cls, *modules: ModuleDef) -> Container:
        """
        Create a container and apply the given modules to it.

        Args:
            modules: Modules whose configure() declares bindings, applied in order

        Returns:
            A container that is still open for further bindings
        """
        container = cls()
        for module in modules:
            module.configure(container)
        return container

    @property
    def is_installed(self) -> bool:
        return self._installed

    def bind(self, service_type: type[T] | Any) -> BindingBuilder:
        """Start declaring the binding for a service type."""
        with self._lock:
            self._ensure_not_installed("bind")
            if service_type is None:
                raise ConfigurationError("Service type must not be None")
            self._ensure_no_pending(f"bind {type_name(service_type)}")

            declaration = Declaration(self, service_type)
            self._pending = declaration
            return BindingBuilder(declaration)

    def install(self) -> None:
        """Seal the container and resolve every binding triggered on install."""
        with self._lock:
            self._ensure_not_installed("install")
            self._ensure_no_pending("install")
            self._installed = True

            eager = [b for b in self._cache.get_bindings() if b.trigger is Trigger.ON_INSTALL]
            logger.debug("Installing container, resolving %d bindings on install", len(eager))
            self._ensure_bindings_resolved(eager)
            logger.debug("Container installed")

    def validate(self) -> None:
        """
        Check the configuration before install.

        Runs the circular dependency check from every binding, then resolves
        the bindings triggered on install, then every other binding. Transient
        implementations are checked for a parameterless constructor without
        being constructed.
        """
        with self._lock:
            self._ensure_not_installed("validate")
            self._ensure_no_pending("validate")

            bindings = self._cache.get_bindings()
            for binding in bindings:
                check_circular_dependencies(binding, self._cache.get_direct_bindings)
            logger.debug("No circular dependencies among %d bindings", len(bindings))

            visited: set[Binding] = set()
            for binding in bindings:
                if binding.trigger is Trigger.ON_INSTALL:
                    self._ensure_binding_resolved(binding, visited)

            self._ensure_bindings_resolved(bindings)

            # Transients are never built by the sweep; only to_new() can declare them.
            for binding in bindings:
                if binding.is_transient:
                    Constructor.check_parameterless(binding.implementation_type)

            logger.debug("Validated %d bindings", len(bindings))

    def get(self, service_type: type[T] | Any) -> T:
        with self._lock:
            self._ensure_installed("get")

            binding = self._cache.get_binding(service_type)
            self._ensure_binding_resolved(binding, set())

            if binding.is_cached:
                return self._get_object(binding)  # type: ignore[no-any-return]
            return self._create_object(binding)  # type: ignore[no-any-return]

    def inject(self, obj: object) -> None:
        if obj is None:
            raise TypeError("Cannot inject dependencies into None")

        with self._lock:
            self._ensure_installed("inject")

            # The object itself need not be bound, only its dependencies.
            cls = type(obj)
            dependencies = [
                self._cache.get_binding(dependency, dependent=cls)
                for dependency in self._cache.get_dependencies(cls)
            ]
            self._ensure_bindings_resolved(dependencies)
            self._inject_and_initialize(obj)

    def has(self, service_type: type[T] | Any) -> bool:
        with self._lock:
            return self._cache.has_binding(service_type)

    def resolution_order(self) -> list[Binding]:
        """
        Every binding, ordered so that dependencies come before their dependents.

        Raises:
            CircularDependencyError: If the bindings form a cycle
            MissingBindingError: If a dependency has no binding
        """
        with self._lock:
            return topological_order(self._cache.get_bindings(), self._cache.get_direct_bindings)

    def _complete_declaration(self, declaration: Declaration, binding: Binding) -> None:
        with self._lock:
            try:
                if declaration is not self._pending:
                    raise ConfigurationError(
                        f"The declaration for {type_name(binding.service_type)} is no longer pending"
                    )
                self._ensure_not_installed("complete a binding")

                bindings = [binding]
                if binding.is_transient:
                    bindings.append(self._factory_binding(binding))

                for b in bindings:
                    if self._cache.has_binding(b.service_type):
                        raise ConfigurationError(f"{type_name(b.service_type)} is already bound")

                for b in bindings:
                    self._cache.add_binding(b)
                    logger.debug("Bound %s", b)
            finally:
                if self._pending is declaration:
                    self._pending = None

    def _abort_declaration(self, declaration: Declaration) -> None:
        with self._lock:
            if self._pending is declaration:
                self._pending = None

    @staticmethod
    def _factory_binding(binding: Binding) -> Binding:
        return Binding(
            Factory[binding.service_type],  # type: ignore[name-defined]
            Factory,
            partial(Factory, binding.service_type),
            Lifetime.CACHED,
            Trigger.ON_REQUEST,
        )

    def _ensure_bindings_resolved(self, bindings: Iterable[Binding]) -> None:
        visited: set[Binding] = set()
        for binding in bindings:
            self._ensure_binding_resolved(binding, visited)

    def _ensure_binding_resolved(self, binding: Binding, visited: set[Binding]) -> None:
        if binding.is_cached and self._has_object(binding):
            return

        if binding in self._resolving:
            cycle = self._resolving[self._resolving.index(binding) :] + [binding]
            raise CircularDependencyError([b.service_type for b in cycle])

        self._resolving.append(binding)
        try:
            for dependency in self._cache.get_direct_bindings(binding):
                # A visited dependency still on the stack is part of a cycle.
                if dependency in visited and dependency not in self._resolving:
                    continue
                visited.add(dependency)
                self._ensure_binding_resolved(dependency, visited)

            if not binding.is_transient:
                self._ensure_object_created(binding)
        finally:
            self._resolving.pop()

    def _ensure_object_created(self, binding: Binding) -> None:
        if not self._has_object(binding):
            self._add_object(binding, self._create_object(binding))

    def _create_object(self, binding: Binding) -> Any:
        obj = binding.creation()
        logger.debug("Constructed %s", binding)
        self._inject_and_initialize(obj)
        return obj

    def _inject_and_initialize(self, obj: object) -> None:
        cls = type(obj)
        for field in self._cache.get_fields(cls):
            binding = self._cache.get_binding(field.field_type, dependent=cls)
            if binding.is_transient:
                value = self._create_object(binding)
            else:
                value = self._get_object(binding)
            field.set(obj, value)

        run_initialize(obj)

    def _get_object(self, binding: Binding) -> Any:
        self._ensure_cached(binding)
        return self._instances[binding]

    def _has_object(self, binding: Binding) -> bool:
        self._ensure_cached(binding)
        return binding in self._instances

    def _add_object(self, binding: Binding, obj: Any) -> None:
        self._ensure_cached(binding)
        self._instances[binding] = obj

    @staticmethod
    def _ensure_cached(binding: Binding) -> None:
        if not binding.is_cached:
            raise RuntimeError(f"{binding} is transient and has no stored instance")

    def _ensure_installed(self, operation: str) -> None:
        if not self._installed:
            raise ConfigurationError(f"Cannot {operation}: the container must be installed first")

    def _ensure_not_installed(self, operation: str) -> None:
        if self._installed:
            raise ConfigurationError(f"Cannot {operation}: the container is already installed")

    def _ensure_no_pending(self, operation: str) -> None:
        if self._pending is not None:
            raise ConfigurationError(
                f"Cannot {operation}: the binding for "
                f"{type_name(self._pending.service_type)} is still being declared"
            )
