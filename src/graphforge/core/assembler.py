"""
Schema assembler - links the registry into one validated GraphQL schema.

Renders every generated type to SDL, checks that each reference resolves,
builds a GraphQLSchema with graphql-core and prints it back in lexicographic
order so equal models always give byte-identical output.

Usage:
    assembler = SchemaAssembler(registry)
    schema = assembler.assemble(resolver_info)
    print(schema.sdl)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from graphql import (
    GraphQLError,
    GraphQLSchema,
    build_ast_schema,
    lexicographic_sort_schema,
    parse,
    print_schema,
    validate_schema,
)
from graphql.language.print_string import print_string

from .errors import SchemaLinkError, UnregisteredTypeError
from .registry import TypeRegistry
from .resolver_info import ResolverInfo
from .scalars import BUILTIN_GRAPHQL_SCALARS
from .schema_types import ArgumentSpec, FieldSpec, GeneratedType, TypeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphSchema:
    """
    Result of one build. Immutable and safe to share between readers.

    Attributes:
        sdl: Canonical SDL, types and fields in lexicographic order
        schema: Validated graphql-core schema
        types: Generated types by name
        resolver_info: Root and relationship field info by "Parent.field"
    """
    sdl: str
    schema: GraphQLSchema
    types: Mapping[str, GeneratedType]
    resolver_info: Mapping[str, ResolverInfo]

    def type_names(self) -> list[str]:
        return sorted(self.types)

    def get_type(self, name: str) -> GeneratedType | None:
        return self.types.get(name)

    def has_type(self, name: str) -> bool:
        return name in self.types

    def root_fields(self) -> dict[str, list[str]]:
        """Query and Mutation field names, sorted."""
        roots = {}
        for root in (self.schema.query_type, self.schema.mutation_type):
            if root is not None:
                roots[root.name] = sorted(root.fields)
        return roots

    def to_dict(self) -> dict[str, Any]:
        return {
            "types": {name: self.types[name].to_dict() for name in self.type_names()},
            "roots": self.root_fields(),
            "resolver_info": {key: info.to_dict() for key, info in sorted(self.resolver_info.items())},
        }


# =============================================================================
# SDL rendering
# =============================================================================


def _description(text: str | None, indent: str = "") -> list[str]:
    return [f"{indent}{print_string(text)}"] if text else []


def _deprecation(reason: str | None) -> str:
    return f" @deprecated(reason: {print_string(reason)})" if reason is not None else ""


def _render_args(args: list[ArgumentSpec]) -> str:
    if not args:
        return ""
    rendered = []
    for arg in args:
        text = f"{arg.name}: {arg.type}"
        if arg.default is not None:
            text += f" = {arg.default}"
        if arg.description:
            text = f"{print_string(arg.description)} {text}"
        rendered.append(text)
    return f"({', '.join(rendered)})"


def _render_field(spec: FieldSpec) -> list[str]:
    line = f"  {spec.name}{_render_args(spec.args)}: {spec.type}"
    if spec.default is not None:
        line += f" = {spec.default}"
    line += _deprecation(spec.deprecation)
    return [*_description(spec.description, "  "), line]


def render_type(generated: GeneratedType) -> str:
    """SDL for one generated type."""
    lines = _description(generated.description)
    keyword = generated.kind.value

    match generated.kind:
        case TypeKind.SCALAR:
            lines.append(f"scalar {generated.name}")
        case TypeKind.UNION:
            lines.append(f"union {generated.name} = {' | '.join(generated.members)}")
        case TypeKind.ENUM:
            lines.append(f"enum {generated.name} {{")
            for value in generated.values:
                lines.extend(_description(value.description, "  "))
                lines.append(f"  {value.name}{_deprecation(value.deprecation)}")
            lines.append("}")
        case _:
            header = f"{keyword} {generated.name}"
            if generated.interfaces:
                header += f" implements {' & '.join(generated.interfaces)}"
            lines.append(f"{header} {{")
            for spec in generated.fields:
                lines.extend(_render_field(spec))
            lines.append("}")

    return "\n".join(lines)


def render_sdl(types: Iterable[GeneratedType]) -> str:
    return "\n\n".join(render_type(t) for t in types) + "\n"


# =============================================================================
# Assembler
# =============================================================================


class SchemaAssembler:
    """Links one build's registry into a GraphSchema."""

    def __init__(self, registry: TypeRegistry):
        self.registry = registry

    def assemble(self, resolver_info: Iterable[ResolverInfo] = ()) -> GraphSchema:
        """
        Raises:
            UnregisteredTypeError: a type references a name nobody registered
            SchemaLinkError: graphql-core rejects the schema
        """
        types = self.registry.types()
        self.check_references(types)

        sdl = render_sdl(types)
        schema = self._link(sdl)
        schema = lexicographic_sort_schema(schema)

        logger.debug(f"Linked {len(types)} types")
        return GraphSchema(
            sdl=print_schema(schema) + "\n",
            schema=schema,
            types=MappingProxyType({t.name: t for t in types}),
            resolver_info=MappingProxyType({info.key: info for info in resolver_info}),
        )

    def check_references(self, types: list[GeneratedType]):
        for generated in types:
            for name in generated.referenced_types():
                if name not in BUILTIN_GRAPHQL_SCALARS and name not in self.registry:
                    raise UnregisteredTypeError(name, referenced_by=generated.name)

    @staticmethod
    def _link(sdl: str) -> GraphQLSchema:
        try:
            schema = build_ast_schema(parse(sdl))
        except (GraphQLError, TypeError) as e:
            raise SchemaLinkError([str(e)]) from e

        errors = validate_schema(schema)
        if errors:
            raise SchemaLinkError([error.message for error in errors])
        return schema
