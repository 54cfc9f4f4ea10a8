"""
SchemaCompiler: error reporting, determinism, build options and the
smaller shape rules (defaults, empty inputs, edge elision).
"""

from __future__ import annotations

import pytest

from graphforge import BuildOptions, DeprecatedCategory, ModelError, SchemaCompiler
from graphforge.core.loader import load_sdl_model
from graphforge.core.scalars import ScalarKind

from .conftest import MOVIE_SDL
from .helpers import arg_names, canonical_fields, deprecation, field_names, field_type


# =============================================================================
# Errors
# =============================================================================


class TestCompilationErrors:

    def test_unknown_target(self, build):
        sdl = MOVIE_SDL.replace("actors: [Actor!]!", "actors: [Ghost!]!")

        with pytest.raises(ModelError) as exc_info:
            build(sdl)
        assert "[Movie.actors] Unknown relationship target 'Ghost'" in [str(e) for e in exc_info.value.errors]

    def test_duplicate_type(self):
        graph = load_sdl_model(MOVIE_SDL + "\ntype Movie @node {\n  name: String\n}\n")

        result = SchemaCompiler(graph).compile()
        assert not result.success
        assert result.schema is None
        assert "[Movie] Type 'Movie' is defined 2 times" in result.error_messages()

    def test_errors_are_collected(self):
        sdl = '''
        type Movie @node {
          id: String @id
          ratings: [Int] @unique
          actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN, properties: "Missing")
        }

        type Actor @node {
          name: String!
        }
        '''
        result = SchemaCompiler(load_sdl_model(sdl)).compile()

        assert result.error_messages() == [
            "[Movie.id] @id can only be used on fields of type ID",
            "[Movie.ratings] @unique cannot be used on list fields",
            "[Movie.actors] Unknown relationship properties type 'Missing'",
        ]

    def test_name_collision(self):
        sdl = MOVIE_SDL + '''
        type MovieActor @node {
          role: String
        }
        '''
        result = SchemaCompiler(load_sdl_model(sdl)).compile()

        assert not result.success
        assert len(result.errors) == 1
        assert "MovieActorsConnection" in result.errors[0].message

    def test_interface_relationship_must_match(self, build):
        sdl = '''
        interface Production {
          title: String!
          actors: [Actor!]! @declareRelationship
        }

        type Movie implements Production @node {
          title: String!
          actors: [Actor] @relationship(type: "ACTED_IN", direction: IN)
        }

        type Actor @node {
          name: String!
        }
        '''
        with pytest.raises(ModelError, match=r"Relationship must have type '\[Actor!\]!'"):
            build(sdl)

    def test_unsupported_extra_filter(self, build):
        options = BuildOptions(extra_filters=((ScalarKind.INT, ("matches",)),))
        result = SchemaCompiler(load_sdl_model(MOVIE_SDL), options).compile()

        assert not result.success
        assert result.error_messages() == ["[global] Scalar kind 'Int' does not support operator 'matches'"]


# =============================================================================
# Determinism
# =============================================================================


class TestDeterminism:

    def test_declaration_order_does_not_matter(self, build):
        blocks = MOVIE_SDL.strip().split("\n\n")
        reordered = "\n\n".join(reversed(blocks))
        assert reordered != MOVIE_SDL.strip()

        assert build(reordered).sdl == build(MOVIE_SDL).sdl

    def test_builds_do_not_share_state(self):
        compiler = SchemaCompiler(load_sdl_model(MOVIE_SDL))
        first = compiler.compile().schema
        second = compiler.compile().schema

        assert first.sdl == second.sdl
        assert first.types["MovieWhere"] is not second.types["MovieWhere"]


# =============================================================================
# Build options
# =============================================================================


class TestBuildOptions:

    def test_extra_string_filter(self, build):
        options = BuildOptions(extra_filters=((ScalarKind.STRING, ("matches",)),))
        schema = build(MOVIE_SDL, options)

        assert field_type(schema, "StringScalarFilters", "matches") == "String"
        assert field_type(schema, "MovieWhere", "title_MATCHES") == "String"
        assert deprecation(schema, "MovieWhere", "title_MATCHES") == (
            "Please use the relevant generic filter title: { matches: ... }"
        )
        assert "released_MATCHES" not in field_names(schema, "MovieWhere")

    def test_without_deprecated(self, build):
        schema = build(MOVIE_SDL, BuildOptions.without_deprecated())

        assert "@deprecated" not in schema.sdl
        for generated in schema.types.values():
            assert not any(f.is_deprecated for f in generated.fields), generated.name
        assert "actorsAggregate" not in field_names(schema, "MovieWhere")
        assert not schema.has_type("MovieActorsAggregateInput")
        # canonical surface is untouched
        assert canonical_fields(schema, "MovieWhere") == canonical_fields(build(MOVIE_SDL), "MovieWhere")

    def test_single_category(self, build):
        options = BuildOptions(exclude_deprecated=frozenset({DeprecatedCategory.MUTATION_OPERATIONS}))
        schema = build(MOVIE_SDL, options)

        assert "title_SET" not in field_names(schema, "MovieUpdateInput")
        assert "title_CONTAINS" in field_names(schema, "MovieWhere")
        assert "actors_SOME" in field_names(schema, "MovieWhere")


# =============================================================================
# Shape rules
# =============================================================================


class TestShapeRules:

    def test_defaults_in_create_input(self, build):
        sdl = '''
        enum Genre {
          ACTION
          DRAMA
        }

        type Movie @node {
          title: String! @default(value: "Untitled")
          rating: Int @default(value: 5)
          genre: Genre @default(value: ACTION)
        }
        '''
        schema = build(sdl)
        create = schema.types["MovieCreateInput"]

        assert create.field("rating").default == "5"
        assert create.field("genre").default == "ACTION"
        assert create.field("title").default == '"Untitled"'
        assert "genre: Genre = ACTION" in schema.sdl
        assert field_type(schema, "MovieWhere", "genre") == "GenreEnumScalarFilters"

    def test_empty_inputs_get_placeholder(self, build):
        schema = build('''
        type Tag @node {
          id: ID! @id
        }
        ''')

        assert field_names(schema, "TagCreateInput") == ["_emptyInput"]
        assert field_names(schema, "TagUpdateInput") == ["_emptyInput"]
        assert arg_names(schema, "Mutation", "updateTags") == ["where"]
        assert arg_names(schema, "Mutation", "createTags") == ["input"]

    def test_generated_edge_fields_drop_edge_inputs(self, build):
        sdl = '''
        type Movie @node {
          title: String!
          actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN, properties: "ActedIn")
        }

        type Actor @node {
          name: String!
        }

        type ActedIn @relationshipProperties {
          id: ID! @id
          createdAt: DateTime! @timestamp
        }
        '''
        schema = build(sdl)

        assert not schema.has_type("ActedInCreateInput")
        assert not schema.has_type("ActedInUpdateInput")
        assert "edge" not in field_names(schema, "MovieActorsConnectFieldInput")
        assert "edge" not in field_names(schema, "MovieActorsCreateFieldInput")
        assert "edge" not in field_names(schema, "MovieActorsUpdateConnectionInput")
        # still readable and filterable
        assert field_type(schema, "MovieActorsRelationship", "properties") == "ActedIn!"
        assert field_type(schema, "ActedInWhere", "createdAt") == "DateTimeScalarFilters"
        assert schema.has_type("DateTime")

    def test_optional_edge_input(self, build):
        schema = build(MOVIE_SDL.replace("screenTime: Int!", "screenTime: Int"))
        assert field_type(schema, "MovieActorsConnectFieldInput", "edge") == "ActedInCreateInput"

    def test_list_fields(self, build):
        schema = build('''
        type Movie @node {
          tags: [String!]
        }
        ''')

        assert field_type(schema, "MovieWhere", "tags") == "StringListFilters"
        assert field_names(schema, "StringListFilters") == ["eq", "includes"]
        assert field_type(schema, "MovieUpdateInput", "tags") == "ListStringMutations"
        assert field_names(schema, "ListStringMutations") == ["pop", "push", "set"]
        assert "tags_PUSH" in field_names(schema, "MovieUpdateInput")
        assert not schema.has_type("MovieSort")
