"""
Aggregation gating: per-relationship switch, top-level switch, abstract targets.
"""

from __future__ import annotations

import logging

import pytest

from .conftest import INTERFACE_SDL, MOVIE_SDL, UNION_SDL
from .helpers import field_names


NO_MOVIE_AGGREGATE = MOVIE_SDL.replace(
    'movies: [Movie!]! @relationship(type: "ACTED_IN", direction: OUT, properties: "ActedIn")',
    'movies: [Movie!]! @relationship(type: "ACTED_IN", direction: OUT, properties: "ActedIn", aggregate: false)',
)


class TestRelationshipAggregation:

    def test_disabled_relationship(self, build):
        schema = build(NO_MOVIE_AGGREGATE)

        assert field_names(schema, "ActorMoviesConnection") == ["edges", "pageInfo", "totalCount"]
        for name in (
            "ActorMovieMoviesAggregateSelection",
            "ActorMovieMoviesNodeAggregateSelection",
            "ActorMovieMoviesEdgeAggregateSelection",
            "ActorMoviesNodeAggregationWhereInput",
            "ActorMoviesConnectionAggregateInput",
            "ActorMoviesAggregateInput",
        ):
            assert not schema.has_type(name), name
        assert "moviesAggregate" not in field_names(schema, "ActorWhere")
        assert "aggregate" not in field_names(schema, "ActorMoviesConnectionFilters")

    def test_other_side_unaffected(self, build):
        schema = build(NO_MOVIE_AGGREGATE)

        assert "aggregate" in field_names(schema, "MovieActorsConnection")
        assert schema.has_type("ActedInAggregationWhereInput")

    def test_top_level_aggregate_is_independent(self, build):
        schema = build(NO_MOVIE_AGGREGATE)

        assert field_names(schema, "MoviesConnection") == ["aggregate", "edges", "pageInfo", "totalCount"]
        assert field_names(schema, "MovieAggregate") == ["count", "node"]
        assert field_names(schema, "MovieAggregateNode") == ["isbn", "released", "title"]


class TestAbstractTargets:

    @pytest.mark.parametrize("sdl, field, directive", [
        (INTERFACE_SDL, "actedIn", '@relationship(type: "ACTED_IN", direction: OUT'),
        (UNION_SDL, "cast", '@relationship(type: "CAST", direction: IN'),
    ])
    @pytest.mark.parametrize("value", ["true", "false"])
    def test_aggregate_flag_is_a_no_op(self, build, sdl, field, directive, value, caplog):
        flagged = sdl.replace(directive, f"{directive}, aggregate: {value}")
        assert flagged != sdl

        with caplog.at_level(logging.WARNING, logger="graphforge"):
            schema = build(flagged)

        assert schema.sdl == build(sdl).sdl
        assert "aggregate on " in caplog.text
        assert f".{field} has no effect" in caplog.text
