"""
Field introspection for extracting injectable dependencies from classes.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin

from .errors import ConfigurationError, ConstructionError, type_name


class Inject:
    """
    Marker for injectable fields.

    Usage:
        class Service:
            repository: Annotated[Repository, Inject]
    """

    def __repr__(self) -> str:
        return "Inject()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Inject)

    def __hash__(self) -> int:
        return hash(Inject)


def is_inject_marker(value: Any) -> bool:
    """Check whether an Annotated metadata entry marks a field as injectable."""
    return value is Inject or isinstance(value, Inject)


@dataclass(frozen=True)
class InjectableField:
    """A field that receives a dependency."""

    name: str
    field_type: Any
    declaring_type: type

    def set(self, target: object, value: Any) -> None:
        """Assign the dependency, bypassing frozen dataclasses and custom __setattr__."""
        object.__setattr__(target, self.name, value)

    def __str__(self) -> str:
        return f"{self.declaring_type.__name__}.{self.name}: {type_name(self.field_type)}"


def distinct_field_types(fields: Iterable[InjectableField]) -> list[Any]:
    """Distinct field types, in first-seen order."""
    return list(dict.fromkeys(f.field_type for f in fields))


class FieldIntrospector:
    """Extracts injectable fields from class annotations."""

    @staticmethod
    def get_injectable_fields(cls: type) -> list[InjectableField]:
        """
        Collect every injectable field of a class and its base classes.

        Most-derived class first, declaration order within each class. A field
        redeclared in a subclass is reported once, from the subclass.
        """
        fields: list[InjectableField] = []
        seen: set[str] = set()

        for klass in cls.__mro__:
            if klass is object:
                continue
            for name, hint in FieldIntrospector._own_annotations(klass).items():
                if name in seen:
                    continue
                field_type = FieldIntrospector._injected_type(hint)
                if field_type is None:
                    continue
                seen.add(name)
                fields.append(InjectableField(name, field_type, klass))

        return fields

    @staticmethod
    def get_dependency_types(cls: type) -> list[Any]:
        """Distinct field types of the injectable fields, in first-seen order."""
        return distinct_field_types(FieldIntrospector.get_injectable_fields(cls))

    @staticmethod
    def _own_annotations(klass: type) -> dict[str, Any]:
        """
        Annotations declared on klass itself, string entries evaluated one by one.

        An entry that cannot be evaluated is skipped unless it mentions Inject,
        so plain fields typed with TYPE_CHECKING-only imports do not get in the way.
        """
        try:
            raw = inspect.get_annotations(klass)
        except NameError as e:
            raise ConfigurationError(
                f"Cannot read annotations of {klass.__qualname__}: {e}"
            ) from e

        module = sys.modules.get(klass.__module__)
        globalns = vars(module) if module is not None else {}
        localns = dict(vars(klass))

        annotations: dict[str, Any] = {}
        for name, hint in raw.items():
            if isinstance(hint, str):
                try:
                    hint = eval(hint, globalns, localns)
                except (NameError, AttributeError, TypeError, SyntaxError) as e:
                    if Inject.__name__ not in hint:
                        continue
                    raise ConfigurationError(
                        f"Cannot evaluate annotation {klass.__qualname__}.{name}: {e}"
                    ) from e
            annotations[name] = hint
        return annotations

    @staticmethod
    def _injected_type(hint: Any) -> Any | None:
        if get_origin(hint) is not Annotated:
            return None
        base, *metadata = get_args(hint)
        if any(is_inject_marker(m) for m in metadata):
            return base
        return None


class Constructor:
    """Zero-argument construction of implementation types."""

    @staticmethod
    def check_parameterless(cls: type) -> None:
        """Raise ConstructionError if the class needs constructor arguments."""
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            # Some builtins expose no signature; the call itself will tell.
            return

        try:
            signature.bind()
        except TypeError as e:
            raise ConstructionError(cls, f"no parameterless constructor ({e})") from e

    @staticmethod
    def construct(cls: type) -> Any:
        Constructor.check_parameterless(cls)
        return cls()
