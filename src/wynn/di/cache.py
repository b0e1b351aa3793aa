"""
Binding registry with memoized per-type introspection results.
"""

from __future__ import annotations

from typing import Any

from .bindings import Binding
from .errors import ConfigurationError, MissingBindingError, type_name
from .introspection import FieldIntrospector, InjectableField, distinct_field_types


class BindingCache:
    """
    Maps service types to bindings and memoizes dependency lookups.

    Injectable fields are memoized per implementation type, direct dependency
    bindings per binding. Both are computed lazily on first access.
    """

    def __init__(self) -> None:
        self._bindings: dict[Any, Binding] = {}
        self._direct_bindings: dict[Binding, tuple[Binding, ...]] = {}
        self._fields: dict[type, tuple[InjectableField, ...]] = {}

    def add_binding(self, binding: Binding) -> None:
        if binding.service_type in self._bindings:
            raise ConfigurationError(
                f"{type_name(binding.service_type)} is already bound"
            )
        self._bindings[binding.service_type] = binding

    def has_binding(self, service_type: Any) -> bool:
        return service_type in self._bindings

    def get_binding(self, service_type: Any, dependent: Any | None = None) -> Binding:
        try:
            return self._bindings[service_type]
        except KeyError:
            raise MissingBindingError(service_type, dependent) from None

    def get_bindings(self) -> list[Binding]:
        """All bindings in declaration order."""
        return list(self._bindings.values())

    def get_fields(self, cls: type) -> tuple[InjectableField, ...]:
        fields = self._fields.get(cls)
        if fields is None:
            fields = tuple(FieldIntrospector.get_injectable_fields(cls))
            self._fields[cls] = fields
        return fields

    def get_dependencies(self, cls: type) -> list[Any]:
        """Distinct injectable field types of a class."""
        return distinct_field_types(self.get_fields(cls))

    def get_direct_bindings(self, binding: Binding) -> tuple[Binding, ...]:
        """Bindings the given binding's implementation depends on directly."""
        direct = self._direct_bindings.get(binding)
        if direct is None:
            direct = tuple(
                self.get_binding(dependency, dependent=binding.service_type)
                for dependency in self.get_dependencies(binding.implementation_type)
            )
            self._direct_bindings[binding] = direct
        return direct
