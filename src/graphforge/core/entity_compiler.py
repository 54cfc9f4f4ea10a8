"""
Entity compiler - per-type artifacts of nodes, interfaces, unions and
relationship properties types.

Runs before the relationship compiler, which adds relationship fields to the
types created here. `finalize()` runs after both and closes up inputs that
ended up empty.

Usage:
    entities = EntityCompiler(ctx)
    for node in graph.nodes:
        entities.compile_node(node)
    ...
    entities.finalize()
"""

from __future__ import annotations

import logging

from . import naming
from .attributes import (
    add_aggregate_selections,
    add_create_fields,
    add_filter_fields,
    add_logical_operators,
    add_mutation_fields,
    add_object_fields,
    add_sort_fields,
    has_aggregate_selections,
)
from .context import BuildContext
from .defs import InterfaceDef, NodeDef, RelationshipPropertiesDef, TimestampOperation, UnionDef
from .schema_types import GeneratedType, TypeKind

logger = logging.getLogger(__name__)

EntityRole = naming.EntityRole

EMPTY_INPUT_FIELD = "_emptyInput"


def sort_description(plural: str, type_name: str) -> str:
    return (
        f"Fields to sort {plural} by. The order in which sorts are applied is not guaranteed "
        f"when specifying many fields in one {type_name}Sort object."
    )


def properties_description(owning_fields: list[str]) -> str:
    lines = "\n".join(f"* {name}" for name in owning_fields)
    return f"The edge properties for the following fields:\n{lines}"


class EntityCompiler:
    """Compiles declared types into their object type and per-type inputs."""

    def __init__(self, ctx: BuildContext):
        self.ctx = ctx
        self.graph = ctx.graph
        self.index = ctx.index
        self.registry = ctx.registry

    # =========================================================================
    # Nodes
    # =========================================================================

    def compile_node(self, node: NodeDef):
        ctx = self.ctx
        plural = naming.plural_name(node.name, node.plural)
        logger.debug(f"Compiling node {node.name}")

        def build_object(t: GeneratedType):
            t.interfaces.extend(node.implements)
            add_object_fields(ctx, t, node.fields)

        ctx.named_type("node", node.name, TypeKind.OBJECT, node.description, build=build_object)

        self._sort(node.name, plural, node.fields)
        self._where(node.name, node.fields)
        ctx.entity_type(node.name, EntityRole.CREATE_INPUT, build=lambda t: add_create_fields(ctx, t, node.fields))
        ctx.entity_type(node.name, EntityRole.UPDATE_INPUT, build=lambda t: add_mutation_fields(ctx, t, node.fields))

        if self.index.is_target(node.name):
            self._connect_where(node.name)

        if self.index.has_top_level_aggregate(node.name):
            self._aggregate(node)
        if self.index.has_connection(node.name):
            self._connection(node.name, plural, aggregate=self.index.has_top_level_aggregate(node.name))

    def _aggregate(self, node: NodeDef):
        ctx = self.ctx
        node_selection = None
        if has_aggregate_selections(ctx, node.fields):
            node_selection = ctx.entity_type(
                node.name,
                EntityRole.AGGREGATE_NODE,
                TypeKind.OBJECT,
                build=lambda t: add_aggregate_selections(ctx, t, node.fields),
            ).name

        def build(t: GeneratedType):
            t.add_field("count", f"{ctx.scalars.shared(naming.COUNT)}!")
            if node_selection:
                t.add_field("node", f"{node_selection}!")

        ctx.entity_type(node.name, EntityRole.AGGREGATE, TypeKind.OBJECT, build=build)

    # =========================================================================
    # Interfaces
    # =========================================================================

    def compile_interface(self, iface: InterfaceDef):
        ctx = self.ctx
        plural = naming.plural_name(iface.name, iface.plural)
        implementations = sorted(n.name for n in self.graph.implementations(iface.name))
        logger.debug(f"Compiling interface {iface.name} ({', '.join(implementations)})")

        def build_object(t: GeneratedType):
            add_object_fields(ctx, t, iface.fields)

        ctx.named_type("interface", iface.name, TypeKind.INTERFACE, iface.description, build=build_object)

        def build_implementation(t: GeneratedType):
            for name in implementations:
                t.add_value(name)

        implementation = ctx.entity_type(
            iface.name, EntityRole.IMPLEMENTATION, TypeKind.ENUM, build=build_implementation
        )

        self._sort(iface.name, plural, iface.fields)
        where = self._where(iface.name, iface.fields)
        where.add_field(naming.TYPENAME_FILTER, f"[{implementation.name}!]")

        if self.index.is_target(iface.name):
            def build_create(t: GeneratedType):
                for name in implementations:
                    t.add_field(name, naming.entity_name(name, EntityRole.CREATE_INPUT))

            ctx.entity_type(iface.name, EntityRole.CREATE_INPUT, build=build_create)
            ctx.entity_type(
                iface.name, EntityRole.UPDATE_INPUT, build=lambda t: add_mutation_fields(ctx, t, iface.fields)
            )
            self._connect_where(iface.name)

        if self.index.has_connection(iface.name):
            self._connection(iface.name, plural, aggregate=False)

    # =========================================================================
    # Unions
    # =========================================================================

    def compile_union(self, union: UnionDef):
        ctx = self.ctx
        logger.debug(f"Compiling union {union.name}")

        def build_union(t: GeneratedType):
            t.members.extend(union.members)

        ctx.named_type("union", union.name, TypeKind.UNION, union.description, build=build_union)

        def build_where(t: GeneratedType):
            for member in union.members:
                t.add_field(member, naming.entity_name(member, EntityRole.WHERE))

        ctx.entity_type(union.name, EntityRole.WHERE, build=build_where)

    # =========================================================================
    # Relationship properties
    # =========================================================================

    def compile_properties(self, props: RelationshipPropertiesDef):
        ctx = self.ctx
        logger.debug(f"Compiling relationship properties {props.name}")
        description = props.description
        owning_fields = self.index.owning_fields(props.name)
        if description is None and owning_fields:
            description = properties_description(owning_fields)

        def build_object(t: GeneratedType):
            add_object_fields(ctx, t, props.fields)

        ctx.named_type("relationship_properties", props.name, TypeKind.OBJECT, description, build=build_object)

        if self.index.has_sort(props.name):
            ctx.entity_type(props.name, EntityRole.SORT, build=lambda t: add_sort_fields(ctx, t, props.fields))
        self._where(props.name, props.fields)

        if props.settable_fields(TimestampOperation.CREATE):
            ctx.entity_type(
                props.name, EntityRole.CREATE_INPUT, build=lambda t: add_create_fields(ctx, t, props.fields)
            )
        if props.settable_fields(TimestampOperation.UPDATE):
            ctx.entity_type(
                props.name, EntityRole.UPDATE_INPUT, build=lambda t: add_mutation_fields(ctx, t, props.fields)
            )

    # =========================================================================
    # Shared pieces
    # =========================================================================

    def _sort(self, type_name: str, plural: str, fields):
        if not self.index.has_sort(type_name):
            return
        self.ctx.entity_type(
            type_name,
            EntityRole.SORT,
            description=sort_description(plural, type_name),
            build=lambda t: add_sort_fields(self.ctx, t, fields),
        )

    def _where(self, type_name: str, fields) -> GeneratedType:
        def build(t: GeneratedType):
            add_logical_operators(t)
            add_filter_fields(self.ctx, t, fields)

        return self.ctx.entity_type(type_name, EntityRole.WHERE, build=build)

    def _connect_where(self, type_name: str):
        self.ctx.entity_type(
            type_name,
            EntityRole.CONNECT_WHERE,
            build=lambda t: t.add_field("node", f"{naming.entity_name(type_name, EntityRole.WHERE)}!"),
        )

    def _connection(self, type_name: str, plural: str, aggregate: bool):
        """{Type}Edge and {Plural}Connection for the top-level connection query."""
        ctx = self.ctx
        read = self.index.query_options(type_name).read

        def build_edge(t: GeneratedType):
            t.add_field("cursor", "String!")
            t.add_field("node", f"{type_name}!")

        edge = ctx.entity_type(type_name, EntityRole.EDGE, TypeKind.OBJECT, build=build_edge) if read else None

        def build_connection(t: GeneratedType):
            if aggregate:
                t.add_field("aggregate", f"{naming.entity_name(type_name, EntityRole.AGGREGATE)}!")
            if edge is not None:
                t.add_field("edges", f"[{edge.name}!]!")
            t.add_field("pageInfo", f"{ctx.scalars.shared(naming.PAGE_INFO)}!")
            t.add_field("totalCount", "Int!")

        ctx.named_type("connection", naming.connection_name(type_name, plural), TypeKind.OBJECT, build=build_connection)

    # =========================================================================
    # Finalize
    # =========================================================================

    def finalize(self):
        """Give inputs without fields a placeholder so they stay valid GraphQL."""
        for entity in (*self.graph.nodes, *self.graph.interfaces, *self.graph.relationship_properties):
            for role in (EntityRole.CREATE_INPUT, EntityRole.UPDATE_INPUT):
                generated = self.registry.get(naming.entity_name(entity.name, role))
                if generated is not None and not generated.fields:
                    generated.add_field(EMPTY_INPUT_FIELD, "Boolean")
                    logger.debug(f"{generated.name} has no fields, added {EMPTY_INPUT_FIELD}")


def is_empty_input(generated: GeneratedType) -> bool:
    """True for inputs holding nothing but the placeholder."""
    return generated.field_names == [EMPTY_INPUT_FIELD]
