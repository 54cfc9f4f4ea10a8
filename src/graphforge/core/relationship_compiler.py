"""
Relationship compiler - everything one relationship field adds to the schema.

For a field Owner.field pointing at Target it emits:
- accessors on the owner type: field(...) and fieldConnection(...)
- the Relay connection: {Owner}{Field}Connection, Relationship, ConnectionWhere, ConnectionSort
- filters on {Owner}Where: RelationshipFilters, ConnectionFilters and the legacy mirrors
- nested mutation inputs: FieldInput, UpdateFieldInput, Connect/Create/Delete/Disconnect field inputs
- aggregation selections and filters when aggregation is enabled

Relationships declared by an interface share their connection-level types with
every implementation; those types carry the interface name.

Usage:
    compiler = RelationshipCompiler(ctx)
    for owner, rel in graph.iter_relationships():
        compiler.compile(owner, rel)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from . import deprecated, naming
from .attributes import (
    add_aggregate_selections,
    add_aggregation_filters,
    add_logical_operators,
    has_aggregate_selections,
    has_aggregation_filters,
)
from .context import BuildContext
from .defs import (
    Cardinality,
    InterfaceDef,
    NestedOperation,
    NodeDef,
    RelationshipDef,
    RelationshipPropertiesDef,
    TargetKind,
    TimestampOperation,
)
from .options import DeprecatedCategory
from .scalars import ScalarKind
from .schema_types import ArgumentSpec, GeneratedType, TypeKind
from .utils import pluralize

logger = logging.getLogger(__name__)

Role = naming.RelationshipRole
EntityRole = naming.EntityRole
Owner = Union[NodeDef, InterfaceDef]


@dataclass(frozen=True)
class RelationshipPlan:
    """Resolved facts about one relationship field."""
    owner: Owner
    rel: RelationshipDef
    shared: str
    target_kind: TargetKind
    props: Optional[RelationshipPropertiesDef]
    aggregate: bool

    @property
    def field(self) -> str:
        return self.rel.name

    @property
    def target(self) -> str:
        return self.rel.target

    @property
    def many(self) -> bool:
        return self.rel.cardinality == Cardinality.MANY

    @property
    def owns_connection(self) -> bool:
        """False when the connection types belong to a declaring interface."""
        return self.shared == self.owner.name

    def wrap(self, type_name: str) -> str:
        """[X!] for many, X for one."""
        return f"[{type_name}!]" if self.many else type_name


@dataclass(frozen=True)
class ConnectionTypes:
    connection: str
    where: str
    sort: Optional[str]


class RelationshipCompiler:
    """Compiles relationship fields into the owner's types and their own types."""

    def __init__(self, ctx: BuildContext):
        self.ctx = ctx
        self.graph = ctx.graph
        self.index = ctx.index

    def compile(self, owner: Owner, rel: RelationshipDef):
        plan = self._plan(owner, rel)
        logger.debug(f"Compiling relationship {owner.name}.{rel.name} -> {rel.target}")

        if plan.target_kind == TargetKind.UNION:
            connection = self._union_connection_types(plan)
        else:
            connection = self._connection_types(plan)

        self._accessors(plan, connection)
        self._where_fields(plan, connection)

        if plan.aggregate:
            self._aggregation_inputs(plan)

        # an interface that no relationship targets has no mutation inputs
        if isinstance(owner, InterfaceDef) and not self.index.is_target(owner.name):
            return

        if plan.target_kind == TargetKind.UNION:
            self._union_mutation_inputs(plan)
        else:
            self._mutation_inputs(plan)

    def _plan(self, owner: Owner, rel: RelationshipDef) -> RelationshipPlan:
        declaring = self.index.declaring_interface(owner, rel)
        aggregate = self.index.aggregation_enabled(owner, rel)
        if rel.aggregate is not None and not self.index.supports_aggregation(owner, rel):
            logger.warning(
                f"aggregate on {owner.name}.{rel.name} has no effect: aggregation needs a node owner "
                f"and a list of nodes"
            )
        return RelationshipPlan(
            owner=owner,
            rel=rel,
            shared=declaring.name if declaring else owner.name,
            target_kind=self.graph.kind_of(rel.target),
            props=self.index.properties_of(rel),
            aggregate=aggregate,
        )

    # =========================================================================
    # Connection
    # =========================================================================

    def _connection_types(self, plan: RelationshipPlan) -> ConnectionTypes:
        ctx = self.ctx
        shared, field, target, props = plan.shared, plan.field, plan.target, plan.props

        def build_relationship(t: GeneratedType):
            t.add_field("cursor", "String!")
            t.add_field("node", f"{target}!")
            if props:
                t.add_field("properties", f"{props.name}!")

        relationship = ctx.relationship_type(shared, field, Role.RELATIONSHIP, TypeKind.OBJECT, build=build_relationship)

        def build_where(t: GeneratedType):
            add_logical_operators(t)
            if props:
                t.add_field("edge", naming.entity_name(props.name, EntityRole.WHERE))
            t.add_field("node", naming.entity_name(target, EntityRole.WHERE))

        where = ctx.relationship_type(shared, field, Role.CONNECTION_WHERE, build=build_where)

        sort = None
        edge_sortable = props is not None and self.index.has_sort(props.name)
        if edge_sortable or self.index.has_sort(target):
            def build_sort(t: GeneratedType):
                if edge_sortable:
                    t.add_field("edge", naming.entity_name(props.name, EntityRole.SORT))
                if self.index.has_sort(target):
                    t.add_field("node", naming.entity_name(target, EntityRole.SORT))

            sort = ctx.relationship_type(shared, field, Role.CONNECTION_SORT, build=build_sort).name

        aggregate_selection = None
        if plan.aggregate and plan.owns_connection:
            aggregate_selection = self._aggregate_selection(plan)

        def build_connection(t: GeneratedType):
            if aggregate_selection:
                t.add_field("aggregate", f"{aggregate_selection}!")
            t.add_field("edges", f"[{relationship.name}!]!")
            t.add_field("pageInfo", f"{ctx.scalars.shared(naming.PAGE_INFO)}!")
            t.add_field("totalCount", "Int!")

        connection = ctx.relationship_type(shared, field, Role.CONNECTION, TypeKind.OBJECT, build=build_connection)
        return ConnectionTypes(connection=connection.name, where=where.name, sort=sort)

    def _union_connection_types(self, plan: RelationshipPlan) -> ConnectionTypes:
        ctx = self.ctx
        shared, field, target = plan.shared, plan.field, plan.target
        members = self.graph.union(target).members

        def build_relationship(t: GeneratedType):
            t.add_field("cursor", "String!")
            t.add_field("node", f"{target}!")

        relationship = ctx.relationship_type(shared, field, Role.RELATIONSHIP, TypeKind.OBJECT, build=build_relationship)

        member_wheres = {member: self._member_connection_where(shared, field, member) for member in members}

        def build_where(t: GeneratedType):
            for member in members:
                t.add_field(member, member_wheres[member])

        where = ctx.relationship_type(shared, field, Role.CONNECTION_WHERE, build=build_where)

        def build_connection(t: GeneratedType):
            t.add_field("edges", f"[{relationship.name}!]!")
            t.add_field("pageInfo", f"{ctx.scalars.shared(naming.PAGE_INFO)}!")
            t.add_field("totalCount", "Int!")

        connection = ctx.relationship_type(shared, field, Role.CONNECTION, TypeKind.OBJECT, build=build_connection)
        return ConnectionTypes(connection=connection.name, where=where.name, sort=None)

    def _member_connection_where(self, shared: str, field: str, member: str) -> str:
        def build(t: GeneratedType):
            add_logical_operators(t)
            t.add_field("node", naming.entity_name(member, EntityRole.WHERE))

        return self.ctx.union_member_type(shared, field, member, Role.CONNECTION_WHERE, build=build).name

    # =========================================================================
    # Accessors
    # =========================================================================

    def _accessors(self, plan: RelationshipPlan, connection: ConnectionTypes):
        owner_type = self.ctx.registry.require(plan.owner.name, referenced_by=f"{plan.owner.name}.{plan.field}")
        target_where = naming.entity_name(plan.target, EntityRole.WHERE)

        if plan.many:
            args = [ArgumentSpec("limit", "Int"), ArgumentSpec("offset", "Int")]
            if plan.target_kind != TargetKind.UNION and self.index.has_sort(plan.target):
                args.append(ArgumentSpec("sort", f"[{naming.entity_name(plan.target, EntityRole.SORT)}!]"))
            args.append(ArgumentSpec("where", target_where))
        else:
            args = [ArgumentSpec("where", target_where)]
        owner_type.add_field(plan.field, plan.rel.type, description=plan.rel.description, args=args)

        connection_args = [ArgumentSpec("after", "String"), ArgumentSpec("first", "Int")]
        if connection.sort:
            connection_args.append(ArgumentSpec("sort", f"[{connection.sort}!]"))
        connection_args.append(ArgumentSpec("where", connection.where))
        owner_type.add_field(
            naming.connection_field(plan.field),
            f"{connection.connection}!",
            args=connection_args,
        )

    # =========================================================================
    # Filters
    # =========================================================================

    def _where_fields(self, plan: RelationshipPlan, connection: ConnectionTypes):
        where = self.ctx.registry.require(naming.entity_name(plan.owner.name, EntityRole.WHERE))
        target_where = naming.entity_name(plan.target, EntityRole.WHERE)
        field = plan.field

        if not plan.many:
            where.add_field(field, target_where)
            where.add_field(naming.connection_field(field), connection.where)
            return

        owners = naming.plural_name(plan.owner.name, plan.owner.plural)
        where.add_field(field, self._relationship_filters(plan.target))
        where.add_field(naming.connection_field(field), self._connection_filters(plan, connection, owners))
        deprecated.add_relationship_filters(
            where,
            owners,
            field,
            plan.target,
            target_where,
            connection.connection,
            connection.where,
            self.ctx.options,
        )
        if plan.aggregate:
            deprecated.add_aggregate_outside_connection(
                where,
                field,
                naming.relationship_name(plan.owner.name, field, Role.AGGREGATE_INPUT),
                self.ctx.options,
            )

    def _relationship_filters(self, target: str) -> str:
        """{Target}RelationshipFilters, shared by every relationship to the target."""
        related = pluralize(target)
        target_where = naming.entity_name(target, EntityRole.WHERE)

        def build(t: GeneratedType):
            for quantifier in deprecated.QUANTIFIERS:
                word = "one" if quantifier == "single" else quantifier
                t.add_field(
                    quantifier,
                    target_where,
                    description=f"Filter type where {word} of the related {related} match this filter",
                )

        return self.ctx.entity_type(target, EntityRole.RELATIONSHIP_FILTERS, build=build).name

    def _connection_filters(self, plan: RelationshipPlan, connection: ConnectionTypes, owners: str) -> str:
        aggregate_input = None
        if plan.aggregate:
            aggregate_input = naming.relationship_name(plan.owner.name, plan.field, Role.CONNECTION_AGGREGATE_INPUT)
        related = pluralize(connection.connection)

        def build(t: GeneratedType):
            if aggregate_input:
                t.add_field(
                    "aggregate",
                    aggregate_input,
                    description=f"Filter {owners} by aggregating results on related {connection.connection}s",
                )
            for quantifier in deprecated.QUANTIFIERS:
                t.add_field(
                    quantifier,
                    connection.where,
                    description=deprecated.quantifier_description(owners, quantifier, related),
                )

        return self.ctx.relationship_type(plan.owner.name, plan.field, Role.CONNECTION_FILTERS, build=build).name

    # =========================================================================
    # Aggregation
    # =========================================================================

    def _aggregate_selection(self, plan: RelationshipPlan) -> str:
        ctx = self.ctx
        owner, target, field, props = plan.owner.name, plan.target, plan.field, plan.props
        target_fields = self.index.fields_of(target)

        node_selection = None
        if has_aggregate_selections(ctx, target_fields):
            node_selection = ctx.named_type(
                "aggregate_selection",
                naming.aggregate_selection_name(owner, target, field, naming.AggregateSelectionRole.NODE),
                TypeKind.OBJECT,
                build=lambda t: add_aggregate_selections(ctx, t, target_fields),
            ).name

        edge_selection = None
        if props and has_aggregate_selections(ctx, props.fields):
            edge_selection = ctx.named_type(
                "aggregate_selection",
                naming.aggregate_selection_name(owner, target, field, naming.AggregateSelectionRole.EDGE),
                TypeKind.OBJECT,
                build=lambda t: add_aggregate_selections(ctx, t, props.fields),
            ).name

        def build(t: GeneratedType):
            t.add_field("count", f"{ctx.scalars.shared(naming.COUNT_CONNECTION)}!")
            if edge_selection:
                t.add_field("edge", edge_selection)
            if node_selection:
                t.add_field("node", node_selection)

        return ctx.named_type(
            "aggregate_selection",
            naming.aggregate_selection_name(owner, target, field, naming.AggregateSelectionRole.SELECTION),
            TypeKind.OBJECT,
            build=build,
        ).name

    def _aggregation_inputs(self, plan: RelationshipPlan):
        """ConnectionAggregateInput and, for older clients, the AggregateInput outside the connection."""
        ctx = self.ctx
        owner, field, props = plan.owner.name, plan.field, plan.props
        target_fields = self.index.fields_of(plan.target)

        node_input = None
        if has_aggregation_filters(ctx, target_fields):
            def build_node(t: GeneratedType):
                add_logical_operators(t)
                add_aggregation_filters(ctx, t, target_fields)

            node_input = ctx.relationship_type(owner, field, Role.NODE_AGGREGATION_WHERE_INPUT, build=build_node).name

        edge_input = None
        if props and has_aggregation_filters(ctx, props.fields):
            def build_edge(t: GeneratedType):
                add_logical_operators(t)
                add_aggregation_filters(ctx, t, props.fields)

            edge_input = ctx.entity_type(props.name, EntityRole.AGGREGATION_WHERE_INPUT, build=build_edge).name

        def add_parts(t: GeneratedType):
            if edge_input:
                t.add_field("edge", edge_input)
            if node_input:
                t.add_field("node", node_input)

        def build_connection_aggregate(t: GeneratedType):
            add_logical_operators(t)
            t.add_field("count", ctx.scalars.connection_count_filter())
            add_parts(t)

        ctx.relationship_type(owner, field, Role.CONNECTION_AGGREGATE_INPUT, build=build_connection_aggregate)

        if not ctx.options.include_deprecated(DeprecatedCategory.AGGREGATION_FILTERS_OUTSIDE_CONNECTION):
            return

        def build_aggregate(t: GeneratedType):
            add_logical_operators(t)
            t.add_field("count", ctx.scalars.filters_for_kind(ScalarKind.INT))
            deprecated.add_aggregate_count_filters(t, ctx.options)
            add_parts(t)

        ctx.relationship_type(owner, field, Role.AGGREGATE_INPUT, build=build_aggregate)

    # =========================================================================
    # Nested mutations
    # =========================================================================

    def _mutation_inputs(self, plan: RelationshipPlan):
        ctx = self.ctx
        rel, props, target = plan.rel, plan.props, plan.target
        owner, shared, field = plan.owner.name, plan.shared, plan.field
        connection_where = naming.relationship_name(shared, field, Role.CONNECTION_WHERE)
        target_is_interface = plan.target_kind == TargetKind.INTERFACE

        edge_create = None
        if props and props.settable_fields(TimestampOperation.CREATE):
            suffix = "!" if self.index.edge_required(props) else ""
            edge_create = naming.entity_name(props.name, EntityRole.CREATE_INPUT) + suffix

        inputs: dict[NestedOperation, str] = {}

        if rel.allows(NestedOperation.CONNECT):
            def build_connect(t: GeneratedType):
                if self.index.has_keyed_input(target, NestedOperation.CONNECT):
                    connect_input = naming.entity_name(target, EntityRole.CONNECT_INPUT)
                    t.add_field("connect", connect_input if target_is_interface else f"[{connect_input}!]")
                if edge_create:
                    t.add_field("edge", edge_create)
                t.add_field("where", naming.entity_name(target, EntityRole.CONNECT_WHERE))

            inputs[NestedOperation.CONNECT] = ctx.relationship_type(
                owner, field, Role.CONNECT_FIELD_INPUT, build=build_connect
            ).name

        if rel.allows(NestedOperation.CREATE):
            def build_create(t: GeneratedType):
                if edge_create:
                    t.add_field("edge", edge_create)
                t.add_field("node", f"{naming.entity_name(target, EntityRole.CREATE_INPUT)}!")

            inputs[NestedOperation.CREATE] = ctx.relationship_type(
                owner, field, Role.CREATE_FIELD_INPUT, build=build_create
            ).name

        if rel.allows(NestedOperation.DELETE):
            def build_delete(t: GeneratedType):
                if self.index.has_keyed_input(target, NestedOperation.DELETE):
                    t.add_field("delete", naming.entity_name(target, EntityRole.DELETE_INPUT))
                t.add_field("where", connection_where)

            inputs[NestedOperation.DELETE] = ctx.relationship_type(
                shared, field, Role.DELETE_FIELD_INPUT, build=build_delete
            ).name

        if rel.allows(NestedOperation.DISCONNECT):
            def build_disconnect(t: GeneratedType):
                if self.index.has_keyed_input(target, NestedOperation.DISCONNECT):
                    t.add_field("disconnect", naming.entity_name(target, EntityRole.DISCONNECT_INPUT))
                t.add_field("where", connection_where)

            inputs[NestedOperation.DISCONNECT] = ctx.relationship_type(
                shared, field, Role.DISCONNECT_FIELD_INPUT, build=build_disconnect
            ).name

        if rel.allows(NestedOperation.UPDATE):
            def build_update(t: GeneratedType):
                if props and props.settable_fields(TimestampOperation.UPDATE):
                    t.add_field("edge", naming.entity_name(props.name, EntityRole.UPDATE_INPUT))
                t.add_field("node", naming.entity_name(target, EntityRole.UPDATE_INPUT))
                t.add_field("where", connection_where)

            inputs[NestedOperation.UPDATE] = ctx.relationship_type(
                owner, field, Role.UPDATE_CONNECTION_INPUT, build=build_update
            ).name

        self._owner_inputs(plan, inputs)

    def _union_mutation_inputs(self, plan: RelationshipPlan):
        """Per-member field inputs gathered into inputs keyed by member name."""
        ctx = self.ctx
        rel = plan.rel
        owner, shared, field = plan.owner.name, plan.shared, plan.field
        members = self.graph.union(plan.target).members

        per_member: dict[NestedOperation, dict[str, str]] = {op: {} for op in NestedOperation}
        for member in members:
            member_where = naming.union_member_name(shared, field, member, Role.CONNECTION_WHERE)
            for op, name in self._member_inputs(plan, member, member_where).items():
                per_member[op][member] = name

        def keyed(role: naming.RelationshipRole, by_member: dict[str, str], wrap: bool) -> Optional[str]:
            if not by_member:
                return None

            def build(t: GeneratedType):
                for member in members:
                    if member in by_member:
                        t.add_field(member, plan.wrap(by_member[member]) if wrap else by_member[member])

            return ctx.relationship_type(owner, field, role, build=build).name

        # member FieldInputs back the keyed CreateInput, UpdateFieldInputs the keyed UpdateInput
        field_inputs = {}
        update_inputs = {}
        for member in members:
            parts = {op: per_member[op].get(member) for op in NestedOperation}
            field_input = self._field_input(
                lambda role: ctx.union_member_type(owner, field, member, role),
                plan,
                parts,
            )
            if field_input:
                field_inputs[member] = field_input
            update_input = self._update_field_input(
                lambda role: ctx.union_member_type(owner, field, member, role),
                plan,
                parts,
            )
            if update_input:
                update_inputs[member] = update_input

        owner_fields = {
            EntityRole.CREATE_INPUT: keyed(Role.CREATE_INPUT, field_inputs, wrap=False),
            EntityRole.UPDATE_INPUT: keyed(Role.UPDATE_INPUT, update_inputs, wrap=True),
            EntityRole.CONNECT_INPUT: keyed(Role.CONNECT_INPUT, per_member[NestedOperation.CONNECT], wrap=True),
            EntityRole.DELETE_INPUT: keyed(Role.DELETE_INPUT, per_member[NestedOperation.DELETE], wrap=True),
            EntityRole.DISCONNECT_INPUT: keyed(
                Role.DISCONNECT_INPUT, per_member[NestedOperation.DISCONNECT], wrap=True
            ),
        }
        self._add_owner_fields(plan, owner_fields)

    def _member_inputs(self, plan: RelationshipPlan, member: str, member_where: str) -> dict[NestedOperation, str]:
        ctx = self.ctx
        rel, owner, shared, field = plan.rel, plan.owner.name, plan.shared, plan.field
        inputs: dict[NestedOperation, str] = {}

        if rel.allows(NestedOperation.CONNECT):
            def build_connect(t: GeneratedType):
                if self.index.has_keyed_input(member, NestedOperation.CONNECT):
                    t.add_field("connect", f"[{naming.entity_name(member, EntityRole.CONNECT_INPUT)}!]")
                t.add_field("where", naming.entity_name(member, EntityRole.CONNECT_WHERE))

            inputs[NestedOperation.CONNECT] = ctx.union_member_type(
                owner, field, member, Role.CONNECT_FIELD_INPUT, build=build_connect
            ).name

        if rel.allows(NestedOperation.CREATE):
            inputs[NestedOperation.CREATE] = ctx.union_member_type(
                owner, field, member, Role.CREATE_FIELD_INPUT,
                build=lambda t: t.add_field("node", f"{naming.entity_name(member, EntityRole.CREATE_INPUT)}!"),
            ).name

        if rel.allows(NestedOperation.DELETE):
            def build_delete(t: GeneratedType):
                if self.index.has_keyed_input(member, NestedOperation.DELETE):
                    t.add_field("delete", naming.entity_name(member, EntityRole.DELETE_INPUT))
                t.add_field("where", member_where)

            inputs[NestedOperation.DELETE] = ctx.union_member_type(
                shared, field, member, Role.DELETE_FIELD_INPUT, build=build_delete
            ).name

        if rel.allows(NestedOperation.DISCONNECT):
            def build_disconnect(t: GeneratedType):
                if self.index.has_keyed_input(member, NestedOperation.DISCONNECT):
                    t.add_field("disconnect", naming.entity_name(member, EntityRole.DISCONNECT_INPUT))
                t.add_field("where", member_where)

            inputs[NestedOperation.DISCONNECT] = ctx.union_member_type(
                shared, field, member, Role.DISCONNECT_FIELD_INPUT, build=build_disconnect
            ).name

        if rel.allows(NestedOperation.UPDATE):
            def build_update(t: GeneratedType):
                t.add_field("node", naming.entity_name(member, EntityRole.UPDATE_INPUT))
                t.add_field("where", member_where)

            inputs[NestedOperation.UPDATE] = ctx.union_member_type(
                owner, field, member, Role.UPDATE_CONNECTION_INPUT, build=build_update
            ).name

        return inputs

    # -------------------------------------------------------------------------
    # Field inputs
    # -------------------------------------------------------------------------

    @staticmethod
    def _field_input(make, plan: RelationshipPlan, parts: dict[NestedOperation, Optional[str]]) -> Optional[str]:
        """FieldInput: connect and create, used by the owner's CreateInput."""
        connect = parts.get(NestedOperation.CONNECT)
        create = parts.get(NestedOperation.CREATE)
        if not (connect or create):
            return None
        t = make(Role.FIELD_INPUT)
        if connect:
            t.add_field("connect", plan.wrap(connect))
        if create:
            t.add_field("create", plan.wrap(create))
        return t.name

    @staticmethod
    def _update_field_input(make, plan: RelationshipPlan, parts: dict[NestedOperation, Optional[str]]) -> Optional[str]:
        """UpdateFieldInput: every allowed nested operation, used by the owner's UpdateInput."""
        if not any(parts.values()):
            return None
        t = make(Role.UPDATE_FIELD_INPUT)
        for op, name in (
            ("connect", parts.get(NestedOperation.CONNECT)),
            ("create", parts.get(NestedOperation.CREATE)),
            ("delete", parts.get(NestedOperation.DELETE)),
            ("disconnect", parts.get(NestedOperation.DISCONNECT)),
        ):
            if name:
                t.add_field(op, plan.wrap(name))
        update = parts.get(NestedOperation.UPDATE)
        if update:
            t.add_field("update", update)
        return t.name

    def _owner_inputs(self, plan: RelationshipPlan, inputs: dict[NestedOperation, str]):
        ctx = self.ctx
        owner, field = plan.owner.name, plan.field

        def make(role: naming.RelationshipRole) -> GeneratedType:
            return ctx.relationship_type(owner, field, role)

        field_input = self._field_input(make, plan, inputs)
        update_input = self._update_field_input(make, plan, inputs)

        self._add_owner_fields(plan, {
            EntityRole.CREATE_INPUT: field_input,
            EntityRole.UPDATE_INPUT: plan.wrap(update_input) if update_input else None,
            EntityRole.CONNECT_INPUT: self._wrapped(plan, inputs.get(NestedOperation.CONNECT)),
            EntityRole.DELETE_INPUT: self._wrapped(plan, inputs.get(NestedOperation.DELETE)),
            EntityRole.DISCONNECT_INPUT: self._wrapped(plan, inputs.get(NestedOperation.DISCONNECT)),
        })

    @staticmethod
    def _wrapped(plan: RelationshipPlan, name: Optional[str]) -> Optional[str]:
        return plan.wrap(name) if name else None

    def _add_owner_fields(self, plan: RelationshipPlan, fields: dict[naming.EntityRole, Optional[str]]):
        """Attach the relationship's inputs to the owner's Create/Update/keyed inputs."""
        owner = plan.owner.name
        keyed = {
            EntityRole.CONNECT_INPUT: NestedOperation.CONNECT,
            EntityRole.DELETE_INPUT: NestedOperation.DELETE,
            EntityRole.DISCONNECT_INPUT: NestedOperation.DISCONNECT,
        }
        for role, type_name in fields.items():
            if not type_name:
                continue
            if role in keyed:
                if not self.index.has_keyed_input(owner, keyed[role]):
                    continue
                target = self.ctx.entity_type(owner, role)
            else:
                target = self.ctx.registry.get(naming.entity_name(owner, role))
                # interface create inputs are keyed by implementation
                if target is None or (isinstance(plan.owner, InterfaceDef) and role == EntityRole.CREATE_INPUT):
                    continue
            target.add_field(plan.field, type_name)
