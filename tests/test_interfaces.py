"""
Interfaces: implementation enums, keyed create inputs and relationship types
shared with every implementation.
"""

from __future__ import annotations

from .helpers import arg_names, field_names, field_type


class TestInterfaceTypes:

    def test_interface_object(self, interface_schema):
        assert field_names(interface_schema, "Production") == ["actors", "actorsConnection", "title"]
        assert interface_schema.schema.get_type("Movie").interfaces[0].name == "Production"

    def test_implementation_enum(self, interface_schema):
        values = list(interface_schema.schema.get_type("ProductionImplementation").values)
        assert values == ["Movie", "Show"]
        assert field_type(interface_schema, "ProductionWhere", "typename") == "[ProductionImplementation!]"

    def test_keyed_create_input(self, interface_schema):
        assert field_names(interface_schema, "ProductionCreateInput") == ["Movie", "Show"]
        assert field_type(interface_schema, "ProductionCreateInput", "Movie") == "MovieCreateInput"
        assert interface_schema.has_type("ProductionConnectWhere")

    def test_top_level_connection_has_no_aggregate(self, interface_schema):
        assert field_names(interface_schema, "ProductionsConnection") == ["edges", "pageInfo", "totalCount"]
        assert "productions" in interface_schema.root_fields()["Query"]
        assert arg_names(interface_schema, "Query", "productions") == ["limit", "offset", "sort", "where"]


class TestSharedRelationshipTypes:

    def test_implementations_use_interface_connection(self, interface_schema):
        assert field_type(interface_schema, "Movie", "actorsConnection") == "ProductionActorsConnection!"
        assert field_type(interface_schema, "Show", "actorsConnection") == "ProductionActorsConnection!"
        assert not interface_schema.has_type("MovieActorsConnection")
        assert not interface_schema.has_type("ShowActorsRelationship")

    def test_shared_nested_inputs(self, interface_schema):
        assert field_type(
            interface_schema, "MovieUpdateInput", "actors"
        ) == "[MovieActorsUpdateFieldInput!]"
        assert field_type(
            interface_schema, "MovieActorsUpdateFieldInput", "delete"
        ) == "[ProductionActorsDeleteFieldInput!]"
        assert field_type(
            interface_schema, "ProductionActorsDeleteFieldInput", "where"
        ) == "ProductionActorsConnectionWhere"

    def test_owner_filters_keep_owner_name(self, interface_schema):
        assert field_type(interface_schema, "MovieWhere", "actorsConnection") == "MovieActorsConnectionFilters"


class TestInterfaceTargets:

    def test_connect_into_interface_is_singular(self, interface_schema):
        assert field_type(
            interface_schema, "ActorActedInConnectFieldInput", "connect"
        ) == "ProductionConnectInput"
        assert field_type(
            interface_schema, "ActorActedInConnectFieldInput", "where"
        ) == "ProductionConnectWhere"
        assert field_type(interface_schema, "ActorActedInCreateFieldInput", "node") == "ProductionCreateInput!"

    def test_no_nested_aggregation(self, interface_schema):
        assert not interface_schema.has_type("ActorProductionActedInAggregateSelection")
        assert not interface_schema.has_type("ActorActedInConnectionAggregateInput")
        assert field_names(interface_schema, "ActorActedInConnection") == ["edges", "pageInfo", "totalCount"]

    def test_sort_uses_interface(self, interface_schema):
        assert arg_names(interface_schema, "Actor", "actedIn") == ["limit", "offset", "sort", "where"]
        assert str(
            interface_schema.schema.get_type("Actor").fields["actedIn"].args["sort"].type
        ) == "[ProductionSort!]"
