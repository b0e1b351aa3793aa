#!/usr/bin/env python3
"""
Unit tests for injectable field discovery and zero-argument construction.
"""

from __future__ import annotations

import unittest
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

from wynn.di import ConfigurationError, ConstructionError, FieldIntrospector, Inject
from wynn.di.cache import BindingCache
from wynn.di.introspection import Constructor, is_inject_marker

if TYPE_CHECKING:
    from decimal import Decimal


class Database:
    pass


class Cache:
    pass


class Base:
    database: Annotated[Database, Inject]
    name: str = "base"


class Derived(Base):
    cache: Annotated[Cache, Inject()]
    backup: Annotated[Database, Inject]
    label: Annotated[str, "not injectable"] = "derived"


class Override(Base):
    database: Annotated[Database, Inject]


class Unresolvable:
    missing: Annotated[DoesNotExist, Inject]  # type: ignore[name-defined]  # noqa: F821


class Priced:
    database: Annotated[Database, Inject]
    price: Decimal | None = None


class DiscountedPriced(Priced):
    discount: Decimal = None  # type: ignore[assignment]
    cache: Annotated[Cache, Inject]


@dataclass(frozen=True)
class FrozenHolder:
    database: Annotated[Database, Inject] = None  # type: ignore[assignment]


class WithDefaults:
    def __init__(self, value: int = 1):
        self.value = value


class WithArguments:
    def __init__(self, value: int):
        self.value = value


class TestFieldIntrospector(unittest.TestCase):
    """Test discovery of Annotated[T, Inject] fields."""

    def test_no_fields(self):
        self.assertEqual(FieldIntrospector.get_injectable_fields(Database), [])

    def test_own_fields(self):
        fields = FieldIntrospector.get_injectable_fields(Base)

        self.assertEqual([(f.name, f.field_type) for f in fields], [("database", Database)])
        self.assertIs(fields[0].declaring_type, Base)

    def test_most_derived_first_in_declaration_order(self):
        fields = FieldIntrospector.get_injectable_fields(Derived)

        self.assertEqual(
            [(f.name, f.field_type, f.declaring_type) for f in fields],
            [
                ("cache", Cache, Derived),
                ("backup", Database, Derived),
                ("database", Database, Base),
            ],
        )

    def test_redeclared_field_reported_once(self):
        fields = FieldIntrospector.get_injectable_fields(Override)

        self.assertEqual(len(fields), 1)
        self.assertIs(fields[0].declaring_type, Override)

    def test_dependency_types_are_distinct(self):
        self.assertEqual(FieldIntrospector.get_dependency_types(Derived), [Cache, Database])

    def test_cache_dependencies_match_introspector(self):
        self.assertEqual(
            BindingCache().get_dependencies(Derived),
            FieldIntrospector.get_dependency_types(Derived),
        )

    def test_unevaluable_plain_annotations_are_skipped(self):
        fields = FieldIntrospector.get_injectable_fields(DiscountedPriced)

        self.assertEqual(
            [(f.name, f.field_type, f.declaring_type) for f in fields],
            [("cache", Cache, DiscountedPriced), ("database", Database, Priced)],
        )

    def test_unresolvable_annotation_fails(self):
        with self.assertRaises(ConfigurationError):
            FieldIntrospector.get_injectable_fields(Unresolvable)

    def test_setter_fills_frozen_dataclass(self):
        holder = FrozenHolder()
        database = Database()

        (field,) = FieldIntrospector.get_injectable_fields(FrozenHolder)
        field.set(holder, database)

        self.assertIs(holder.database, database)

    def test_field_str(self):
        (field,) = FieldIntrospector.get_injectable_fields(Base)

        self.assertEqual(str(field), "Base.database: Database")

    def test_inject_marker(self):
        self.assertTrue(is_inject_marker(Inject))
        self.assertTrue(is_inject_marker(Inject()))
        self.assertFalse(is_inject_marker("Inject"))
        self.assertEqual(Inject(), Inject())


class TestConstructor(unittest.TestCase):
    """Test zero-argument construction."""

    def test_constructs_plain_class(self):
        self.assertIsInstance(Constructor.construct(Database), Database)

    def test_constructor_defaults_are_allowed(self):
        self.assertEqual(Constructor.construct(WithDefaults).value, 1)

    def test_required_arguments_fail(self):
        with self.assertRaises(ConstructionError) as ctx:
            Constructor.construct(WithArguments)

        self.assertIs(ctx.exception.implementation_type, WithArguments)
        self.assertIn("WithArguments", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
