"""
Naming grammar for generated types and root fields.

Every generated name is derived here from an (owner, field, role) tuple so the
grammar can be tested without building a schema.

Usage:
    from graphforge.core import naming

    naming.entity_name("Movie", naming.EntityRole.WHERE)           # MovieWhere
    naming.relationship_name("Movie", "actors",
                             naming.RelationshipRole.CONNECTION)    # MovieActorsConnection
"""

from __future__ import annotations

from enum import Enum

from .utils import lower_first, pluralize, upper_first


# =============================================================================
# Shared types
# =============================================================================

SORT_DIRECTION = "SortDirection"
PAGE_INFO = "PageInfo"
COUNT = "Count"
COUNT_CONNECTION = "CountConnection"
CREATE_INFO = "CreateInfo"
UPDATE_INFO = "UpdateInfo"
DELETE_INFO = "DeleteInfo"
CONNECTION_AGGREGATION_COUNT_FILTER = "ConnectionAggregationCountFilterInput"
QUERY = "Query"
MUTATION = "Mutation"

# Filter fields every Where input carries, and the implementation filter of interfaces
LOGICAL_OPERATORS = ("AND", "NOT", "OR")
TYPENAME_FILTER = "typename"


# =============================================================================
# Scalar artifacts
# =============================================================================


class ScalarRole(str, Enum):
    FILTERS = "filters"
    LIST_FILTERS = "list_filters"
    MUTATIONS = "mutations"
    LIST_MUTATIONS = "list_mutations"
    AGGREGATE_SELECTION = "aggregate_selection"
    AGGREGATION_FILTERS = "aggregation_filters"


def scalar_name(kind: str, role: ScalarRole, is_enum: bool = False, is_user: bool = False) -> str:
    """
    Name of a shared scalar artifact.

    Examples:
        (String, FILTERS) -> StringScalarFilters
        (Float, LIST_MUTATIONS) -> ListFloatMutations
        (Genre, FILTERS, is_enum) -> GenreEnumScalarFilters
        (Url, LIST_FILTERS, is_user) -> UrlListScalarFilters
    """
    if is_enum:
        return {
            ScalarRole.FILTERS: f"{kind}EnumScalarFilters",
            ScalarRole.LIST_FILTERS: f"{kind}ListEnumScalarFilters",
            ScalarRole.MUTATIONS: f"{kind}EnumScalarMutations",
            ScalarRole.LIST_MUTATIONS: f"{kind}ListEnumScalarMutations",
        }[role]

    if is_user:
        return {
            ScalarRole.FILTERS: f"{kind}ScalarFilters",
            ScalarRole.LIST_FILTERS: f"{kind}ListScalarFilters",
            ScalarRole.MUTATIONS: f"{kind}ScalarMutations",
            ScalarRole.LIST_MUTATIONS: f"{kind}ListScalarMutations",
        }[role]

    return {
        ScalarRole.FILTERS: f"{kind}ScalarFilters",
        ScalarRole.LIST_FILTERS: f"{kind}ListFilters",
        ScalarRole.MUTATIONS: f"{kind}ScalarMutations",
        ScalarRole.LIST_MUTATIONS: f"List{kind}Mutations",
        ScalarRole.AGGREGATE_SELECTION: f"{kind}AggregateSelection",
        ScalarRole.AGGREGATION_FILTERS: f"{kind}ScalarAggregationFilters",
    }[role]


# =============================================================================
# Per-type artifacts
# =============================================================================


class EntityRole(str, Enum):
    SORT = "Sort"
    WHERE = "Where"
    CREATE_INPUT = "CreateInput"
    UPDATE_INPUT = "UpdateInput"
    CONNECT_INPUT = "ConnectInput"
    DELETE_INPUT = "DeleteInput"
    DISCONNECT_INPUT = "DisconnectInput"
    CONNECT_WHERE = "ConnectWhere"
    RELATIONSHIP_FILTERS = "RelationshipFilters"
    AGGREGATE = "Aggregate"
    AGGREGATE_NODE = "AggregateNode"
    AGGREGATION_WHERE_INPUT = "AggregationWhereInput"
    EDGE = "Edge"
    IMPLEMENTATION = "Implementation"


def entity_name(type_name: str, role: EntityRole) -> str:
    """{Type}{Role}, e.g. MovieSort, ActedInAggregationWhereInput."""
    return f"{type_name}{role.value}"


def plural_name(type_name: str, plural: str | None = None) -> str:
    """Upper-first plural used inside type names (Movies, People)."""
    return upper_first(plural) if plural else pluralize(type_name)


def connection_name(type_name: str, plural: str | None = None) -> str:
    """Top-level Relay connection, {Plural}Connection."""
    return f"{plural_name(type_name, plural)}Connection"


# =============================================================================
# Root operations
# =============================================================================


def root_list_field(type_name: str, plural: str | None = None) -> str:
    return lower_first(plural_name(type_name, plural))


def root_connection_field(type_name: str, plural: str | None = None) -> str:
    return f"{root_list_field(type_name, plural)}Connection"


def create_mutation(type_name: str, plural: str | None = None) -> str:
    return f"create{plural_name(type_name, plural)}"


def update_mutation(type_name: str, plural: str | None = None) -> str:
    return f"update{plural_name(type_name, plural)}"


def delete_mutation(type_name: str, plural: str | None = None) -> str:
    return f"delete{plural_name(type_name, plural)}"


def create_response(type_name: str, plural: str | None = None) -> str:
    return f"Create{plural_name(type_name, plural)}MutationResponse"


def update_response(type_name: str, plural: str | None = None) -> str:
    return f"Update{plural_name(type_name, plural)}MutationResponse"


# =============================================================================
# Per-relationship artifacts
# =============================================================================


class RelationshipRole(str, Enum):
    CONNECT_FIELD_INPUT = "ConnectFieldInput"
    CREATE_FIELD_INPUT = "CreateFieldInput"
    DELETE_FIELD_INPUT = "DeleteFieldInput"
    DISCONNECT_FIELD_INPUT = "DisconnectFieldInput"
    FIELD_INPUT = "FieldInput"
    UPDATE_FIELD_INPUT = "UpdateFieldInput"
    UPDATE_CONNECTION_INPUT = "UpdateConnectionInput"
    CONNECTION = "Connection"
    CONNECTION_WHERE = "ConnectionWhere"
    CONNECTION_SORT = "ConnectionSort"
    CONNECTION_FILTERS = "ConnectionFilters"
    CONNECTION_AGGREGATE_INPUT = "ConnectionAggregateInput"
    AGGREGATE_INPUT = "AggregateInput"
    NODE_AGGREGATION_WHERE_INPUT = "NodeAggregationWhereInput"
    RELATIONSHIP = "Relationship"
    # keyed by union member
    CONNECT_INPUT = "ConnectInput"
    CREATE_INPUT = "CreateInput"
    DELETE_INPUT = "DeleteInput"
    DISCONNECT_INPUT = "DisconnectInput"
    UPDATE_INPUT = "UpdateInput"


def relationship_prefix(owner: str, field: str) -> str:
    return f"{owner}{upper_first(field)}"


def relationship_name(owner: str, field: str, role: RelationshipRole) -> str:
    """
    {Owner}{Field}{Role}.

    Examples:
        (Movie, actors, CONNECTION) -> MovieActorsConnection
        (Actor, movies, UPDATE_FIELD_INPUT) -> ActorMoviesUpdateFieldInput
    """
    return f"{relationship_prefix(owner, field)}{role.value}"


def union_member_name(owner: str, field: str, member: str, role: RelationshipRole) -> str:
    """{Owner}{Field}{Member}{Role}, e.g. MovieSearchGenreConnectFieldInput."""
    return f"{relationship_prefix(owner, field)}{member}{role.value}"


class AggregateSelectionRole(str, Enum):
    SELECTION = "AggregateSelection"
    NODE = "NodeAggregateSelection"
    EDGE = "EdgeAggregateSelection"


def aggregate_selection_name(owner: str, target: str, field: str, role: AggregateSelectionRole) -> str:
    """
    Cross-type aggregate selection, {Owner}{Target}{Field}{Role}.

    Examples:
        (Actor, Movie, movies, SELECTION) -> ActorMovieMoviesAggregateSelection
        (Actor, Movie, movies, EDGE) -> ActorMovieMoviesEdgeAggregateSelection
    """
    return f"{owner}{target}{upper_first(field)}{role.value}"


# =============================================================================
# Field names
# =============================================================================


def connection_field(field: str) -> str:
    """Connection accessor and connection filter name, {field}Connection."""
    return f"{field}Connection"


def aggregate_filter_field(field: str) -> str:
    """Deprecated aggregate filter outside the connection, {field}Aggregate."""
    return f"{field}Aggregate"


def deprecated_field(field: str, suffix: str) -> str:
    """Legacy flat field, {field}_{SUFFIX}."""
    return f"{field}_{suffix}"
