"""
Scalar artifact compiler - shared filter, mutation and aggregation types.

One type per (kind, capability set), interned in the build's registry. Also
declares the custom scalars, user enums and the fixed shared types (PageInfo,
SortDirection, the mutation info types) the first time something needs them.
"""

from __future__ import annotations

import logging

from . import naming
from .defs import GraphDef, TargetKind, TypeRef
from .options import BuildOptions
from .registry import TypeDescriptor, TypeRegistry
from .scalars import (
    BUILTIN_GRAPHQL_SCALARS,
    SCALAR_DESCRIPTIONS,
    Capabilities,
    ScalarKind,
    aggregate_selection_type,
    aggregation_filter_description,
    aggregation_filter_kind,
    capabilities_for,
    filters_description,
    is_scalar_kind,
    mutations_description,
    opaque_capabilities,
)
from .schema_types import GeneratedType, TypeKind

logger = logging.getLogger(__name__)


_SHARED_OBJECTS: dict[str, tuple[str | None, tuple[tuple[str, str], ...]]] = {
    naming.PAGE_INFO: (
        "Pagination information (Relay)",
        (
            ("endCursor", "String"),
            ("hasNextPage", "Boolean!"),
            ("hasPreviousPage", "Boolean!"),
            ("startCursor", "String"),
        ),
    ),
    naming.COUNT: (None, (("nodes", "Int!"),)),
    naming.COUNT_CONNECTION: (None, (("edges", "Int!"), ("nodes", "Int!"))),
    naming.CREATE_INFO: (
        "Information about the number of nodes and relationships created during a create mutation",
        (("nodesCreated", "Int!"), ("relationshipsCreated", "Int!")),
    ),
    naming.UPDATE_INFO: (
        "Information about the number of nodes and relationships created and deleted during an update mutation",
        (
            ("nodesCreated", "Int!"),
            ("nodesDeleted", "Int!"),
            ("relationshipsCreated", "Int!"),
            ("relationshipsDeleted", "Int!"),
        ),
    ),
    naming.DELETE_INFO: (
        "Information about the number of nodes and relationships deleted during a delete mutation",
        (("nodesDeleted", "Int!"), ("relationshipsDeleted", "Int!")),
    ),
}


class ScalarCompiler:
    """
    Interns scalar artifacts on demand.

    Usage:
        scalars = ScalarCompiler(registry, graph, options)
        caps = scalars.capabilities(field.type_ref)
        where.add_field(field.name, scalars.filters(caps))
    """

    def __init__(self, registry: TypeRegistry, graph: GraphDef, options: BuildOptions):
        self.registry = registry
        self.graph = graph
        self.options = options

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    def capabilities(self, ref: TypeRef) -> Capabilities:
        """Capability set for a field type; declares the scalar it needs."""
        if is_scalar_kind(ref.base):
            kind = ScalarKind(ref.base)
            self.declare_kind(kind)
            return capabilities_for(kind, ref.is_list, self.options.extra_filters_for(kind))

        is_enum = self.graph.kind_of(ref.base) == TargetKind.ENUM
        return opaque_capabilities(ref.base, ref.is_list, is_enum)

    def declare_kind(self, kind: ScalarKind):
        """Custom scalar definition for kinds GraphQL does not ship."""
        if kind.value in BUILTIN_GRAPHQL_SCALARS:
            return
        self.registry.intern(
            TypeDescriptor("scalar", (kind.value,), kind.value),
            lambda name: GeneratedType(name, TypeKind.SCALAR, SCALAR_DESCRIPTIONS.get(kind)),
        )

    def declare_model_types(self):
        """User enums and scalars are emitted whether or not a field uses them."""
        for enum in self.graph.enums:
            generated = GeneratedType(enum.name, TypeKind.ENUM, enum.description)
            for value in enum.values:
                generated.add_value(value)
            self.registry.declare(TypeDescriptor("enum", (enum.name,), enum.name), generated)

        for scalar in self.graph.scalars:
            self.registry.declare(
                TypeDescriptor("user_scalar", (scalar.name,), scalar.name),
                GeneratedType(scalar.name, TypeKind.SCALAR, scalar.description),
            )

    # -------------------------------------------------------------------------
    # Filters and mutations
    # -------------------------------------------------------------------------

    def filters(self, caps: Capabilities) -> str:
        role = naming.ScalarRole.LIST_FILTERS if caps.is_list else naming.ScalarRole.FILTERS
        name = naming.scalar_name(caps.kind, role, caps.is_enum, is_user=not (caps.is_builtin or caps.is_enum))

        def build(type_name: str) -> GeneratedType:
            generated = GeneratedType(type_name, TypeKind.INPUT, filters_description(caps))
            for op in caps.filters:
                generated.add_field(op, "String" if op == "matches" else caps.filter_type(op))
            return generated

        return self.registry.intern(TypeDescriptor("filters", (caps.kind, caps.is_list, caps.filters), name), build).name

    def mutations(self, caps: Capabilities) -> str:
        role = naming.ScalarRole.LIST_MUTATIONS if caps.is_list else naming.ScalarRole.MUTATIONS
        name = naming.scalar_name(caps.kind, role, caps.is_enum, is_user=not (caps.is_builtin or caps.is_enum))

        def build(type_name: str) -> GeneratedType:
            generated = GeneratedType(type_name, TypeKind.INPUT, mutations_description(caps))
            for op in caps.mutations:
                generated.add_field(op, caps.mutation_type(op))
            return generated

        return self.registry.intern(TypeDescriptor("mutations", (caps.kind, caps.is_list), name), build).name

    def filters_for_kind(self, kind: ScalarKind) -> str:
        return self.filters(self.capabilities(TypeRef(kind.value)))

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def aggregate_selection(self, kind: ScalarKind) -> str:
        """{Kind}AggregateSelection, the output shape of one aggregated field."""
        caps = capabilities_for(kind)
        name = naming.scalar_name(kind.value, naming.ScalarRole.AGGREGATE_SELECTION)

        def build(type_name: str) -> GeneratedType:
            generated = GeneratedType(type_name, TypeKind.OBJECT)
            for op in caps.aggregations:
                generated.add_field(op, aggregate_selection_type(kind, op))
            return generated

        self.declare_kind(kind)
        return self.registry.intern(TypeDescriptor("aggregate_selection", (kind.value,), name), build).name

    def aggregation_filters(self, kind: ScalarKind) -> str:
        """{Kind}ScalarAggregationFilters, nested filters on aggregated values."""
        caps = capabilities_for(kind)
        name = naming.scalar_name(kind.value, naming.ScalarRole.AGGREGATION_FILTERS)
        # nested ScalarFilters first so their names exist before the reference
        targets = {op: self.filters_for_kind(aggregation_filter_kind(kind, op)) for op in caps.aggregation_filters}

        def build(type_name: str) -> GeneratedType:
            generated = GeneratedType(type_name, TypeKind.INPUT, aggregation_filter_description(kind))
            for op in caps.aggregation_filters:
                generated.add_field(op, targets[op])
            return generated

        return self.registry.intern(TypeDescriptor("aggregation_filters", (kind.value,), name), build).name

    def connection_count_filter(self) -> str:
        int_filters = self.filters_for_kind(ScalarKind.INT)

        def build(type_name: str) -> GeneratedType:
            generated = GeneratedType(type_name, TypeKind.INPUT)
            generated.add_field("edges", int_filters)
            generated.add_field("nodes", int_filters)
            return generated

        return self.registry.intern(
            TypeDescriptor("shared", (naming.CONNECTION_AGGREGATION_COUNT_FILTER,), naming.CONNECTION_AGGREGATION_COUNT_FILTER),
            build,
        ).name

    # -------------------------------------------------------------------------
    # Shared types
    # -------------------------------------------------------------------------

    def shared(self, name: str) -> str:
        """Intern one of the fixed shared types by name."""
        if name == naming.SORT_DIRECTION:
            return self._sort_direction()

        description, fields = _SHARED_OBJECTS[name]

        def build(type_name: str) -> GeneratedType:
            generated = GeneratedType(type_name, TypeKind.OBJECT, description)
            for field_name, field_type in fields:
                generated.add_field(field_name, field_type)
            return generated

        return self.registry.intern(TypeDescriptor("shared", (name,), name), build).name

    def _sort_direction(self) -> str:
        def build(type_name: str) -> GeneratedType:
            generated = GeneratedType(
                type_name,
                TypeKind.ENUM,
                "An enum for sorting in either ascending or descending order.",
            )
            generated.add_value("ASC", "Sort by field values in ascending order.")
            generated.add_value("DESC", "Sort by field values in descending order.")
            return generated

        return self.registry.intern(
            TypeDescriptor("shared", (naming.SORT_DIRECTION,), naming.SORT_DIRECTION),
            build,
        ).name
