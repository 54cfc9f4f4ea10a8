"""
Type registry interning and schema assembly.
"""

from __future__ import annotations

import pytest

from graphforge.core.assembler import SchemaAssembler, render_type
from graphforge.core.errors import FieldCollisionError, NameCollisionError, SchemaLinkError, UnregisteredTypeError
from graphforge.core.registry import TypeDescriptor, TypeRegistry
from graphforge.core.schema_types import ArgumentSpec, GeneratedType, TypeKind


def _input(name: str) -> GeneratedType:
    generated = GeneratedType(name, TypeKind.INPUT)
    generated.add_field("eq", "String")
    return generated


# =============================================================================
# Registry
# =============================================================================


class TestTypeRegistry:

    def test_intern_is_idempotent(self):
        registry = TypeRegistry()
        calls = []

        def factory(name):
            calls.append(name)
            return _input(name)

        descriptor = TypeDescriptor("filters", ("String", False), "StringScalarFilters")
        first = registry.intern(descriptor, factory)
        second = registry.intern(TypeDescriptor("filters", ("String", False), "StringScalarFilters"), factory)

        assert first is second
        assert calls == ["StringScalarFilters"]
        assert "StringScalarFilters" in registry
        assert len(registry) == 1

    def test_collision_names_both_descriptors(self):
        registry = TypeRegistry()
        registry.intern(TypeDescriptor("connection", ("MovieActors",), "MovieActorsConnection"), _input)

        with pytest.raises(NameCollisionError) as exc_info:
            registry.intern(
                TypeDescriptor("relationship", ("Movie", "actors", "Connection"), "MovieActorsConnection"),
                _input,
            )

        message = str(exc_info.value)
        assert "connection(MovieActors)" in message
        assert "relationship(Movie, actors, Connection)" in message

    def test_declare_checks_collisions(self):
        registry = TypeRegistry()
        registry.declare(TypeDescriptor("node", ("Movie",), "Movie"), GeneratedType("Movie", TypeKind.OBJECT))
        with pytest.raises(NameCollisionError):
            registry.declare(TypeDescriptor("enum", ("Movie",), "Movie"), GeneratedType("Movie", TypeKind.ENUM))

    def test_types_sorted(self):
        registry = TypeRegistry()
        for name in ("Zeta", "Alpha", "Mid"):
            registry.intern(TypeDescriptor("t", (name,), name), _input)
        assert [t.name for t in registry.types()] == ["Alpha", "Mid", "Zeta"]

    def test_require(self):
        registry = TypeRegistry()
        with pytest.raises(UnregisteredTypeError):
            registry.require("Ghost", referenced_by="Movie")


# =============================================================================
# Generated types
# =============================================================================


class TestGeneratedType:

    def test_identical_field_is_kept_once(self):
        generated = _input("StringScalarFilters")
        first = generated.field("eq")

        assert generated.add_field("eq", "String") is first
        assert [f.name for f in generated.fields] == ["eq"]

    def test_different_field_with_same_name(self):
        generated = _input("StringScalarFilters")

        with pytest.raises(FieldCollisionError, match="StringScalarFilters.eq"):
            generated.add_field("eq", "Int")
        with pytest.raises(FieldCollisionError):
            generated.add_field("eq", "String", deprecation="Use in")
        assert generated.field("eq").type == "String"


# =============================================================================
# Assembler
# =============================================================================


def _query(field_type: str, args=None) -> GeneratedType:
    query = GeneratedType("Query", TypeKind.OBJECT)
    query.add_field("thing", field_type, args=args)
    return query


class TestSchemaAssembler:

    def test_links_and_sorts(self):
        registry = TypeRegistry()
        thing = GeneratedType("Thing", TypeKind.OBJECT, description="A thing")
        thing.add_field("name", "String")
        thing.add_field("id", "ID!")
        registry.declare(TypeDescriptor("node", ("Thing",), "Thing"), thing)
        registry.declare(TypeDescriptor("root", ("Query",), "Query"), _query("Thing"))

        schema = SchemaAssembler(registry).assemble()

        assert schema.sdl.index("  id: ID!") < schema.sdl.index("  name: String")
        assert '"""A thing"""' in schema.sdl
        assert schema.type_names() == ["Query", "Thing"]
        with pytest.raises(TypeError):
            schema.types["Other"] = thing

    def test_unregistered_reference(self):
        registry = TypeRegistry()
        registry.declare(TypeDescriptor("root", ("Query",), "Query"), _query("Ghost"))

        with pytest.raises(UnregisteredTypeError) as exc_info:
            SchemaAssembler(registry).assemble()
        assert exc_info.value.name == "Ghost"
        assert exc_info.value.referenced_by == "Query"

    def test_graphql_rejects_output_type_as_argument(self):
        registry = TypeRegistry()
        thing = GeneratedType("Thing", TypeKind.OBJECT)
        thing.add_field("id", "ID")
        registry.declare(TypeDescriptor("node", ("Thing",), "Thing"), thing)
        registry.declare(
            TypeDescriptor("root", ("Query",), "Query"),
            _query("Thing", args=[ArgumentSpec("where", "Thing")]),
        )

        with pytest.raises(SchemaLinkError):
            SchemaAssembler(registry).assemble()

    def test_render_deprecation_and_default(self):
        generated = GeneratedType("MovieCreateInput", TypeKind.INPUT)
        generated.add_field("rating", "Int", default="5")
        generated.add_field("title_EQ", "String", deprecation="Please use the relevant generic filter title: { eq: ... }")

        rendered = render_type(generated)
        assert "  rating: Int = 5" in rendered
        assert '@deprecated(reason: "Please use the relevant generic filter title: { eq: ... }")' in rendered
