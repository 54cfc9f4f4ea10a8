"""
Root operation compiler - Query and Mutation fields.

Runs last, after every per-type artifact exists, and only reads the registry
to decide which optional arguments apply.
"""

from __future__ import annotations

import logging

from . import naming
from .context import BuildContext
from .defs import InterfaceDef, MutationOperation, NodeDef, TimestampOperation, UnionDef
from .entity_compiler import is_empty_input
from .resolver_info import RootFieldInfo, RootOperationKind, populated_fields, unique_fields
from .schema_types import ArgumentSpec, GeneratedType, TypeKind

logger = logging.getLogger(__name__)

EntityRole = naming.EntityRole


class RootCompiler:
    """
    Builds the Query and Mutation types.

    Usage:
        infos = RootCompiler(ctx).compile()
    """

    def __init__(self, ctx: BuildContext):
        self.ctx = ctx
        self.graph = ctx.graph
        self.index = ctx.index
        self.registry = ctx.registry
        self.infos: list[RootFieldInfo] = []

    def compile(self) -> list[RootFieldInfo]:
        self.infos = []
        query = GeneratedType(naming.QUERY, TypeKind.OBJECT)
        mutation = GeneratedType(naming.MUTATION, TypeKind.OBJECT)

        for iface in self.graph.interfaces:
            self._queries(query, iface)
        for node in self.graph.nodes:
            self._queries(query, node)
            self._mutations(mutation, node)
        for union in self.graph.unions:
            self._union_query(query, union)

        self.ctx.named_type("root", naming.QUERY, TypeKind.OBJECT, build=lambda t: t.fields.extend(query.fields))
        if mutation.fields:
            self.ctx.named_type(
                "root", naming.MUTATION, TypeKind.OBJECT, build=lambda t: t.fields.extend(mutation.fields)
            )

        logger.debug(f"Root fields: {len(query.fields)} queries, {len(mutation.fields)} mutations")
        return self.infos

    def _record(self, parent: str, field: str, operation: RootOperationKind, entity: str, unique=(), populated=()):
        self.infos.append(RootFieldInfo(parent, field, operation, entity, tuple(unique), tuple(populated)))

    # =========================================================================
    # Queries
    # =========================================================================

    def _queries(self, query: GeneratedType, entity: NodeDef | InterfaceDef):
        name = entity.name
        options = self.index.query_options(name)
        where = naming.entity_name(name, EntityRole.WHERE)
        sort = []
        if self.index.has_sort(name):
            sort.append(ArgumentSpec("sort", f"[{naming.entity_name(name, EntityRole.SORT)}!]"))
        unique = unique_fields(entity) if isinstance(entity, NodeDef) else ()

        if options.read:
            field = naming.root_list_field(name, entity.plural)
            query.add_field(
                field,
                f"[{name}!]!",
                args=[ArgumentSpec("limit", "Int"), ArgumentSpec("offset", "Int"), *sort, ArgumentSpec("where", where)],
            )
            self._record(naming.QUERY, field, RootOperationKind.READ, name, unique)

        if self.index.has_connection(name):
            field = naming.root_connection_field(name, entity.plural)
            query.add_field(
                field,
                f"{naming.connection_name(name, entity.plural)}!",
                args=[ArgumentSpec("after", "String"), ArgumentSpec("first", "Int"), *sort, ArgumentSpec("where", where)],
            )
            self._record(naming.QUERY, field, RootOperationKind.CONNECTION, name, unique)

    def _union_query(self, query: GeneratedType, union: UnionDef):
        if not self.index.query_options(union.name).read:
            return
        field = naming.root_list_field(union.name, union.plural)
        query.add_field(
            field,
            f"[{union.name}!]!",
            args=[
                ArgumentSpec("limit", "Int"),
                ArgumentSpec("offset", "Int"),
                ArgumentSpec("where", naming.entity_name(union.name, EntityRole.WHERE)),
            ],
        )
        self._record(naming.QUERY, field, RootOperationKind.READ, union.name)

    # =========================================================================
    # Mutations
    # =========================================================================

    def _mutations(self, mutation: GeneratedType, node: NodeDef):
        ctx = self.ctx
        name, plural = node.name, node.plural
        list_field = naming.root_list_field(name, plural)
        where = ArgumentSpec("where", naming.entity_name(name, EntityRole.WHERE))
        unique = unique_fields(node)

        if node.allows(MutationOperation.CREATE):
            response = self._response(
                naming.create_response(name, plural), naming.CREATE_INFO, list_field, name
            )
            field = naming.create_mutation(name, plural)
            mutation.add_field(
                field,
                f"{response}!",
                args=[ArgumentSpec("input", f"[{naming.entity_name(name, EntityRole.CREATE_INPUT)}!]!")],
            )
            self._record(
                naming.MUTATION, field, RootOperationKind.CREATE, name, unique,
                populated_fields(node, TimestampOperation.CREATE),
            )

        if node.allows(MutationOperation.DELETE):
            args = []
            delete_input = self.registry.get(naming.entity_name(name, EntityRole.DELETE_INPUT))
            if delete_input is not None:
                args.append(ArgumentSpec("delete", delete_input.name))
            args.append(where)
            field = naming.delete_mutation(name, plural)
            mutation.add_field(field, f"{ctx.scalars.shared(naming.DELETE_INFO)}!", args=args)
            self._record(naming.MUTATION, field, RootOperationKind.DELETE, name, unique)

        if node.allows(MutationOperation.UPDATE):
            response = self._response(
                naming.update_response(name, plural), naming.UPDATE_INFO, list_field, name
            )
            args = []
            update_input = self.registry.require(naming.entity_name(name, EntityRole.UPDATE_INPUT))
            if not is_empty_input(update_input):
                args.append(ArgumentSpec("update", update_input.name))
            args.append(where)
            field = naming.update_mutation(name, plural)
            mutation.add_field(field, f"{response}!", args=args)
            self._record(
                naming.MUTATION, field, RootOperationKind.UPDATE, name, unique,
                populated_fields(node, TimestampOperation.UPDATE),
            )

    def _response(self, response_name: str, info: str, list_field: str, type_name: str) -> str:
        ctx = self.ctx

        def build(t: GeneratedType):
            t.add_field("info", f"{ctx.scalars.shared(info)}!")
            t.add_field(list_field, f"[{type_name}!]!")

        return ctx.named_type("mutation_response", response_name, TypeKind.OBJECT, build=build).name
