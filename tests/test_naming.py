"""
Naming grammar and pluralization.
"""

from __future__ import annotations

import pytest

from graphforge.core import naming
from graphforge.core.naming import AggregateSelectionRole, EntityRole, RelationshipRole, ScalarRole
from graphforge.core.utils import lower_first, pluralize, to_camel_case, to_constant_case, upper_first


# =============================================================================
# Pluralization
# =============================================================================


@pytest.mark.parametrize("name, plural", [
    ("Movie", "Movies"),
    ("Search", "Searches"),
    ("Box", "Boxes"),
    ("Category", "Categories"),
    ("Day", "Days"),
    ("CastMember", "CastMembers"),
    ("Person", "People"),
    ("Series", "Series"),
    ("movie", "movies"),
])
def test_pluralize(name, plural):
    assert pluralize(name) == plural


def test_case_helpers():
    assert upper_first("actedIn") == "ActedIn"
    assert lower_first("CastMembers") == "castMembers"
    assert to_camel_case("screen_time") == "screenTime"
    assert to_constant_case("startsWith") == "STARTS_WITH"
    assert to_constant_case("averageLength") == "AVERAGE_LENGTH"
    assert to_constant_case("eq") == "EQ"


# =============================================================================
# Generated names
# =============================================================================


class TestScalarNames:

    def test_builtin_kinds(self):
        assert naming.scalar_name("String", ScalarRole.FILTERS) == "StringScalarFilters"
        assert naming.scalar_name("Int", ScalarRole.MUTATIONS) == "IntScalarMutations"
        assert naming.scalar_name("Float", ScalarRole.LIST_MUTATIONS) == "ListFloatMutations"
        assert naming.scalar_name("Float", ScalarRole.LIST_FILTERS) == "FloatListFilters"
        assert naming.scalar_name("String", ScalarRole.AGGREGATE_SELECTION) == "StringAggregateSelection"
        assert naming.scalar_name("Int", ScalarRole.AGGREGATION_FILTERS) == "IntScalarAggregationFilters"

    def test_enums_and_user_scalars(self):
        assert naming.scalar_name("Genre", ScalarRole.FILTERS, is_enum=True) == "GenreEnumScalarFilters"
        assert naming.scalar_name("Genre", ScalarRole.MUTATIONS, is_enum=True) == "GenreEnumScalarMutations"
        assert naming.scalar_name("Url", ScalarRole.LIST_FILTERS, is_user=True) == "UrlListScalarFilters"


class TestEntityNames:

    def test_roles(self):
        assert naming.entity_name("Movie", EntityRole.WHERE) == "MovieWhere"
        assert naming.entity_name("Movie", EntityRole.CONNECT_WHERE) == "MovieConnectWhere"
        assert naming.entity_name("Actor", EntityRole.RELATIONSHIP_FILTERS) == "ActorRelationshipFilters"
        assert naming.entity_name("ActedIn", EntityRole.AGGREGATION_WHERE_INPUT) == "ActedInAggregationWhereInput"

    def test_connection_uses_plural(self):
        assert naming.connection_name("Movie") == "MoviesConnection"
        assert naming.connection_name("Person") == "PeopleConnection"
        assert naming.connection_name("Movie", "films") == "FilmsConnection"


class TestRootNames:

    def test_queries(self):
        assert naming.root_list_field("Movie") == "movies"
        assert naming.root_connection_field("CastMember") == "castMembersConnection"
        assert naming.root_list_field("Movie", "films") == "films"

    def test_mutations(self):
        assert naming.create_mutation("Person") == "createPeople"
        assert naming.update_mutation("Movie") == "updateMovies"
        assert naming.delete_mutation("Movie") == "deleteMovies"
        assert naming.create_response("Movie") == "CreateMoviesMutationResponse"
        assert naming.update_response("Person") == "UpdatePeopleMutationResponse"


class TestRelationshipNames:

    def test_owner_field_role(self):
        assert naming.relationship_name("Movie", "actors", RelationshipRole.CONNECTION) == "MovieActorsConnection"
        assert (
            naming.relationship_name("Actor", "movies", RelationshipRole.UPDATE_FIELD_INPUT)
            == "ActorMoviesUpdateFieldInput"
        )
        assert (
            naming.relationship_name("Movie", "actors", RelationshipRole.NODE_AGGREGATION_WHERE_INPUT)
            == "MovieActorsNodeAggregationWhereInput"
        )

    def test_union_member(self):
        assert (
            naming.union_member_name("Movie", "cast", "Actor", RelationshipRole.CONNECT_FIELD_INPUT)
            == "MovieCastActorConnectFieldInput"
        )

    def test_aggregate_selection_triad(self):
        assert (
            naming.aggregate_selection_name("Actor", "Movie", "movies", AggregateSelectionRole.SELECTION)
            == "ActorMovieMoviesAggregateSelection"
        )
        assert (
            naming.aggregate_selection_name("Actor", "Movie", "movies", AggregateSelectionRole.NODE)
            == "ActorMovieMoviesNodeAggregateSelection"
        )
        assert (
            naming.aggregate_selection_name("Actor", "Movie", "movies", AggregateSelectionRole.EDGE)
            == "ActorMovieMoviesEdgeAggregateSelection"
        )

    def test_field_names(self):
        assert naming.connection_field("actors") == "actorsConnection"
        assert naming.aggregate_filter_field("actors") == "actorsAggregate"
        assert naming.deprecated_field("title", "STARTS_WITH") == "title_STARTS_WITH"
