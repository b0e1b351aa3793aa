"""
Wynn DI - a field-injection dependency injection container.

This library provides:
- A staged DSL for declaring bindings (construction, lifetime, trigger)
- Field injection driven by Annotated[T, Inject] class annotations
- Circular dependency detection over the binding graph
- Cached and transient lifetimes, with Factory[T] for transient services
- Eager resolution on install and lazy resolution on request
"""

from .bindings import Binding, Lifetime, Trigger
from .container import Container
from .core import (
    BindingBuilder,
    CachedLifetimeBuilder,
    LifetimeBuilder,
    ModuleDef,
    RequestTriggerBuilder,
    TriggerBuilder,
)
from .errors import (
    CircularDependencyError,
    ConfigurationError,
    ConstructionError,
    DIError,
    MissingBindingError,
)
from .factory import Factory
from .introspection import FieldIntrospector, Inject, InjectableField
from .lifecycle import Initializable
from .resolver import Resolver

__all__ = [
    "Binding",
    "BindingBuilder",
    "CachedLifetimeBuilder",
    "CircularDependencyError",
    "ConfigurationError",
    "ConstructionError",
    "Container",
    "DIError",
    "Factory",
    "FieldIntrospector",
    "Initializable",
    "Inject",
    "InjectableField",
    "Lifetime",
    "LifetimeBuilder",
    "MissingBindingError",
    "ModuleDef",
    "RequestTriggerBuilder",
    "Resolver",
    "Trigger",
    "TriggerBuilder",
]
