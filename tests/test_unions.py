"""
Unions: member-keyed filters and nested inputs, no sorting.
"""

from __future__ import annotations

from .helpers import arg_names, field_names, field_type


class TestUnionTypes:

    def test_where_is_keyed_by_member(self, union_schema):
        assert field_names(union_schema, "CastMemberWhere") == ["Actor", "Person"]
        assert field_type(union_schema, "CastMemberWhere", "Person") == "PersonWhere"
        assert not union_schema.has_type("CastMemberSort")

    def test_union_query(self, union_schema):
        assert arg_names(union_schema, "Query", "castMembers") == ["limit", "offset", "where"]
        assert field_type(union_schema, "Query", "castMembers") == "[CastMember!]!"
        assert "castMembersConnection" not in union_schema.root_fields()["Query"]


class TestUnionRelationship:

    def test_accessor_has_no_sort(self, union_schema):
        assert arg_names(union_schema, "Movie", "cast") == ["limit", "offset", "where"]
        assert arg_names(union_schema, "Movie", "castConnection") == ["after", "first", "where"]

    def test_connection_where(self, union_schema):
        assert field_names(union_schema, "MovieCastConnectionWhere") == ["Actor", "Person"]
        assert field_type(
            union_schema, "MovieCastConnectionWhere", "Actor"
        ) == "MovieCastActorConnectionWhere"
        assert field_names(union_schema, "MovieCastActorConnectionWhere") == ["AND", "NOT", "OR", "node"]

    def test_create_input(self, union_schema):
        assert field_type(union_schema, "MovieCreateInput", "cast") == "MovieCastCreateInput"
        assert field_names(union_schema, "MovieCastCreateInput") == ["Actor", "Person"]
        assert field_type(union_schema, "MovieCastCreateInput", "Actor") == "MovieCastActorFieldInput"
        assert field_type(
            union_schema, "MovieCastActorFieldInput", "connect"
        ) == "[MovieCastActorConnectFieldInput!]"

    def test_update_input(self, union_schema):
        assert field_type(union_schema, "MovieUpdateInput", "cast") == "MovieCastUpdateInput"
        assert field_type(
            union_schema, "MovieCastUpdateInput", "Actor"
        ) == "[MovieCastActorUpdateFieldInput!]"
        assert field_names(union_schema, "MovieCastActorUpdateFieldInput") == [
            "connect", "create", "delete", "disconnect", "update",
        ]

    def test_members_get_connect_where(self, union_schema):
        assert field_type(union_schema, "ActorConnectWhere", "node") == "ActorWhere!"
        assert field_names(union_schema, "MovieCastActorConnectFieldInput") == ["where"]

    def test_no_aggregation(self, union_schema):
        assert field_names(union_schema, "MovieCastConnection") == ["edges", "pageInfo", "totalCount"]
        assert "castAggregate" not in field_names(union_schema, "MovieWhere")
