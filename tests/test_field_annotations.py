"""
Per-field annotations (@populatedBy and the sortable / filterable /
selectable / settable toggles) and the field names a model may not declare.
"""

from __future__ import annotations

from textwrap import dedent

import pytest

from graphforge import GraphConfigError, SchemaCompiler
from graphforge.core.defs import TimestampOperation
from graphforge.core.loader import load_sdl_model, load_yaml_model

from .helpers import arg_names, canonical_fields, field_names


ANNOTATED_SDL = '''
type Movie @node {
  id: ID! @id
  title: String!
  slug: String! @populatedBy(callback: "slugify", operations: [CREATE])
  editedBy: String @populatedBy(callback: "currentUser")
  released: Int @sortable(byValue: false)
  budget: Float @selectable(onRead: false)
  rating: Float @selectable(onAggregate: false) @filterable(byAggregate: false)
  views: Int @settable(onCreate: false)
  code: String @filterable(byValue: false)
}

type Actor @node {
  name: String!
  movies: [Movie!]! @relationship(type: "ACTED_IN", direction: OUT, properties: "ActedIn")
}

type ActedIn @relationshipProperties {
  screenTime: Int!
  addedAt: DateTime @populatedBy(callback: "now", operations: [CREATE])
}
'''


@pytest.fixture
def annotated_schema(build):
    return build(ANNOTATED_SDL)


def _errors(sdl: str) -> list[str]:
    return SchemaCompiler(load_sdl_model(sdl)).compile().error_messages()


# =============================================================================
# @populatedBy
# =============================================================================


class TestPopulatedBy:

    def test_left_out_of_inputs_per_operation(self, annotated_schema):
        create = field_names(annotated_schema, "MovieCreateInput")
        update = canonical_fields(annotated_schema, "MovieUpdateInput")

        assert "slug" not in create
        assert "editedBy" not in create
        assert "slug" in update
        assert "editedBy" not in update

    def test_stays_readable_and_filterable(self, annotated_schema):
        assert {"slug", "editedBy"} <= set(field_names(annotated_schema, "Movie"))
        assert {"slug", "editedBy"} <= set(field_names(annotated_schema, "MovieWhere"))
        assert {"slug", "editedBy"} <= set(field_names(annotated_schema, "MovieSort"))

    def test_edge_properties(self, annotated_schema):
        assert field_names(annotated_schema, "ActedInCreateInput") == ["screenTime"]
        assert "addedAt" in field_names(annotated_schema, "ActedIn")

    def test_callbacks_in_resolver_info(self, annotated_schema):
        create = annotated_schema.resolver_info["Mutation.createMovies"]
        update = annotated_schema.resolver_info["Mutation.updateMovies"]

        assert create.populated_by == (("slug", "slugify"), ("editedBy", "currentUser"))
        assert update.populated_by == (("editedBy", "currentUser"),)
        assert update.to_dict()["populated_by"] == {"editedBy": "currentUser"}

    def test_operations_default_to_both(self):
        movie = load_sdl_model(ANNOTATED_SDL).node("Movie")

        assert movie.field("editedBy").populated_by.operations == frozenset(TimestampOperation)
        assert movie.field("slug").populated_by.operations == frozenset({TimestampOperation.CREATE})

    def test_cannot_combine_with_default(self):
        sdl = '''
        type Movie @node {
          title: String!
          slug: String @populatedBy(callback: "slugify") @default(value: "none")
        }
        '''
        assert _errors(sdl) == [
            "[Movie.slug] Invalid directive usage: Directive @populatedBy cannot be used in combination with @default",
        ]

    def test_cannot_combine_with_id(self):
        sdl = '''
        type Movie @node {
          id: ID! @id @populatedBy(callback: "newId")
          title: String!
        }
        '''
        assert _errors(sdl) == [
            "[Movie.id] Invalid directive usage: Directive @populatedBy cannot be used in combination with @id",
        ]

    def test_only_on_builtin_scalars(self):
        sdl = '''
        enum Genre {
          ACTION
          DRAMA
        }

        type Movie @node {
          title: String!
          genre: Genre @populatedBy(callback: "classify")
        }
        '''
        messages = _errors(sdl)

        assert len(messages) == 1
        assert messages[0].startswith("[Movie.genre] @populatedBy can only be used on fields of type ID, String")

    def test_not_on_interfaces(self):
        sdl = '''
        interface Production {
          title: String! @populatedBy(callback: "titleCase")
        }

        type Movie implements Production @node {
          title: String!
        }
        '''
        assert (
            "[Production.title] @populatedBy can only be used on fields of nodes and relationship properties types"
            in _errors(sdl)
        )


# =============================================================================
# Toggles
# =============================================================================


class TestFieldToggles:

    def test_sortable(self, annotated_schema):
        assert "released" not in field_names(annotated_schema, "MovieSort")
        assert "released" in field_names(annotated_schema, "MovieWhere")
        assert "released" in field_names(annotated_schema, "Movie")

    def test_sort_type_dropped_when_nothing_sorts(self, build):
        schema = build('''
        type Tag @node {
          name: String @sortable(byValue: false)
          aliases: [String!]!
        }
        ''')

        assert not schema.has_type("TagSort")
        assert arg_names(schema, "Query", "tags") == ["limit", "offset", "where"]

    def test_filterable(self, annotated_schema):
        where = field_names(annotated_schema, "MovieWhere")

        assert "code" not in where
        assert "code_EQ" not in where
        assert "code" in field_names(annotated_schema, "MovieSort")

    def test_filterable_by_aggregate(self, annotated_schema):
        aggregation = field_names(annotated_schema, "ActorMoviesNodeAggregationWhereInput")

        assert "budget" in aggregation
        assert "rating" not in aggregation
        assert "rating_SUM_LT" not in aggregation

    def test_selectable_on_read(self, annotated_schema):
        assert "budget" not in field_names(annotated_schema, "Movie")
        assert "budget" in field_names(annotated_schema, "MovieWhere")
        assert "budget" in field_names(annotated_schema, "MovieSort")
        assert "budget" in field_names(annotated_schema, "MovieCreateInput")

    def test_selectable_on_aggregate(self, annotated_schema):
        node = field_names(annotated_schema, "MovieAggregateNode")

        assert "rating" not in node
        assert "budget" in node
        assert "rating" in field_names(annotated_schema, "Movie")

    def test_settable(self, annotated_schema):
        assert "views" not in field_names(annotated_schema, "MovieCreateInput")
        assert "views" in canonical_fields(annotated_schema, "MovieUpdateInput")

    def test_node_needs_a_readable_field(self):
        sdl = '''
        type Secret @node {
          value: String @selectable(onRead: false)
        }
        '''
        assert _errors(sdl) == ["[Secret] Node has no readable fields"]


# =============================================================================
# Model surfaces
# =============================================================================


class TestAnnotationSurfaces:

    def test_sdl_arguments(self):
        movie = load_sdl_model(ANNOTATED_SDL).node("Movie")

        assert not movie.field("released").sortable.by_value
        assert movie.field("released").filterable.by_value
        assert not movie.field("budget").selectable.on_read
        assert movie.field("budget").selectable.on_aggregate
        assert not movie.field("views").settable.on_create
        assert movie.field("views").settable.on_update
        assert movie.field("slug").populated_by.callback == "slugify"

    def test_unknown_toggle_argument(self):
        with pytest.raises(GraphConfigError, match="Unknown @sortable argument 'byName' on title"):
            load_sdl_model('type Movie @node {\n  title: String @sortable(byName: false)\n}\n')

    def test_yaml_keys(self):
        graph = load_yaml_model(dedent('''
        nodes:
          Movie:
            fields:
              title: String!
              rating: {type: Float, sortable: false, selectable: {on_aggregate: false}}
              editedBy: {type: String, populated_by: {callback: currentUser, operations: [update]}}
        '''))
        movie = graph.node("Movie")

        assert not movie.field("rating").sortable.by_value
        assert movie.field("rating").selectable.on_read
        assert not movie.field("rating").selectable.on_aggregate
        assert movie.field("editedBy").populated_by.operations == frozenset({TimestampOperation.UPDATE})


# =============================================================================
# Reserved names
# =============================================================================


class TestReservedFieldNames:

    def test_logical_operator(self):
        sdl = '''
        type A @node {
          AND: String
          name: String
        }
        '''
        assert _errors(sdl) == ["[A.AND] Field name 'AND' is reserved for generated filters"]

    def test_typename_on_interface(self):
        sdl = '''
        interface Named {
          typename: String
          name: String
        }

        type A implements Named @node {
          typename: String
          name: String
        }
        '''
        assert _errors(sdl) == ["[Named.typename] Field name 'typename' is reserved for generated filters"]

    def test_attribute_mirror(self):
        sdl = '''
        type A @node {
          name: String
          name_EQ: String
        }
        '''
        assert _errors(sdl) == ["[A.name_EQ] Field name collides with the field 'name_EQ' generated for 'name'"]

    def test_relationship_connection_and_aggregate(self):
        sdl = '''
        type Movie @node {
          title: String
          actorsConnection: String
          actorsAggregate: Int
          actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN)
        }

        type Actor @node {
          name: String
        }
        '''
        messages = _errors(sdl)

        assert (
            "[Movie.actorsConnection] Field name collides with the field 'actorsConnection' generated for 'actors'"
            in messages
        )
        assert (
            "[Movie.actorsAggregate] Field name collides with the field 'actorsAggregate' generated for 'actors'"
            in messages
        )

    def test_relationship_properties(self):
        sdl = '''
        type Movie @node {
          title: String
          actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN, properties: "ActedIn")
        }

        type Actor @node {
          name: String
        }

        type ActedIn @relationshipProperties {
          role: String
          OR: String
        }
        '''
        assert "[ActedIn.OR] Field name 'OR' is reserved for generated filters" in _errors(sdl)
