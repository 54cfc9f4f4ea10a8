"""
nestedOperations gating and one-cardinality relationships.
"""

from __future__ import annotations

import pytest

from graphforge import ModelError

from .conftest import MOVIE_SDL
from .helpers import arg_names, field_names, field_type

ACTORS_DIRECTIVE = '@relationship(type: "ACTED_IN", direction: IN, properties: "ActedIn")'


def _actors_with(operations: str) -> str:
    return MOVIE_SDL.replace(
        ACTORS_DIRECTIVE,
        ACTORS_DIRECTIVE[:-1] + f", nestedOperations: {operations})",
    )


DIRECTOR_SDL = '''
type Movie @node {
  title: String!
  director: Person @relationship(type: "DIRECTED", direction: IN)
}

type Person @node {
  name: String!
}
'''


class TestNestedOperations:

    def test_connect_only(self, build):
        schema = build(_actors_with("[CONNECT]"))

        assert field_names(schema, "MovieActorsFieldInput") == ["connect"]
        assert field_names(schema, "MovieActorsUpdateFieldInput") == ["connect"]
        for name in (
            "MovieActorsCreateFieldInput",
            "MovieActorsDeleteFieldInput",
            "MovieActorsDisconnectFieldInput",
            "MovieActorsUpdateConnectionInput",
            "MovieDeleteInput",
        ):
            assert not schema.has_type(name), name
        assert arg_names(schema, "Mutation", "deleteMovies") == ["where"]

    def test_inverse_keeps_everything(self, build):
        schema = build(_actors_with("[CONNECT]"))

        assert field_names(schema, "ActorMoviesUpdateFieldInput") == [
            "connect", "create", "delete", "disconnect", "update",
        ]
        assert arg_names(schema, "Mutation", "deleteActors") == ["delete", "where"]

    def test_no_operations(self, build):
        schema = build(_actors_with("[]"))

        assert "actors" not in field_names(schema, "MovieCreateInput")
        assert "actors" not in field_names(schema, "MovieUpdateInput")
        assert not schema.has_type("MovieActorsFieldInput")
        # reads and filters do not depend on nested operations
        assert "actorsConnection" in field_names(schema, "Movie")
        assert "actors" in field_names(schema, "MovieWhere")

    def test_required_one_needs_create_or_connect(self, build):
        sdl = DIRECTOR_SDL.replace(
            'director: Person @relationship(type: "DIRECTED", direction: IN)',
            'director: Person! @relationship(type: "DIRECTED", direction: IN, nestedOperations: [UPDATE])',
        )

        with pytest.raises(ModelError) as exc_info:
            build(sdl)

        assert [str(e) for e in exc_info.value.errors] == [
            "[Movie.director] Required relationship must allow at least one of CREATE or CONNECT"
        ]


class TestCardinalityOne:

    def test_accessor_takes_where_only(self, build):
        schema = build(DIRECTOR_SDL)

        assert field_type(schema, "Movie", "director") == "Person"
        assert arg_names(schema, "Movie", "director") == ["where"]
        assert arg_names(schema, "Movie", "directorConnection") == ["after", "first", "sort", "where"]

    def test_filters_without_quantifiers(self, build):
        schema = build(DIRECTOR_SDL)
        where = field_names(schema, "MovieWhere")

        assert field_type(schema, "MovieWhere", "director") == "PersonWhere"
        assert field_type(schema, "MovieWhere", "directorConnection") == "MovieDirectorConnectionWhere"
        assert "director_SOME" not in where
        assert "directorAggregate" not in where

    def test_inputs_are_not_lists(self, build):
        schema = build(DIRECTOR_SDL)

        assert field_type(schema, "MovieDirectorFieldInput", "connect") == "MovieDirectorConnectFieldInput"
        assert field_type(schema, "MovieDirectorFieldInput", "create") == "MovieDirectorCreateFieldInput"
        assert field_type(schema, "MovieUpdateInput", "director") == "MovieDirectorUpdateFieldInput"
        assert field_type(
            schema, "MovieDirectorUpdateFieldInput", "update"
        ) == "MovieDirectorUpdateConnectionInput"

    def test_no_aggregation(self, build):
        schema = build(DIRECTOR_SDL)

        assert field_names(schema, "MovieDirectorConnection") == ["edges", "pageInfo", "totalCount"]
        assert not schema.has_type("MoviePersonDirectorAggregateSelection")
