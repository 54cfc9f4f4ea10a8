"""
Build context - the state every compiler of one build shares.

Type helpers intern by a structural descriptor. The optional `build` callback
runs once, when the type is first created; later calls return the same
instance untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from . import naming
from .defs import GraphDef
from .model_index import ModelIndex
from .options import BuildOptions
from .registry import TypeDescriptor, TypeRegistry
from .scalar_compiler import ScalarCompiler
from .schema_types import GeneratedType, TypeKind


Build = Optional[Callable[[GeneratedType], None]]


@dataclass
class BuildContext:
    """
    Registry, model and options of a single build.

    Usage:
        ctx = BuildContext.create(graph, options)
        where = ctx.entity_type("Movie", naming.EntityRole.WHERE)
    """
    graph: GraphDef
    options: BuildOptions
    registry: TypeRegistry
    index: ModelIndex
    scalars: ScalarCompiler

    @classmethod
    def create(cls, graph: GraphDef, options: BuildOptions) -> "BuildContext":
        registry = TypeRegistry()
        return cls(
            graph=graph,
            options=options,
            registry=registry,
            index=ModelIndex(graph),
            scalars=ScalarCompiler(registry, graph, options),
        )

    def _intern(
        self,
        descriptor: TypeDescriptor,
        kind: TypeKind,
        description: Optional[str],
        build: Build,
    ) -> GeneratedType:
        def factory(name: str) -> GeneratedType:
            generated = GeneratedType(name, kind, description)
            if build is not None:
                build(generated)
            return generated

        return self.registry.intern(descriptor, factory)

    def entity_type(
        self,
        type_name: str,
        role: naming.EntityRole,
        kind: TypeKind = TypeKind.INPUT,
        description: Optional[str] = None,
        build: Build = None,
    ) -> GeneratedType:
        """{Type}{Role}"""
        descriptor = TypeDescriptor("entity", (type_name, role.value), naming.entity_name(type_name, role))
        return self._intern(descriptor, kind, description, build)

    def relationship_type(
        self,
        owner: str,
        field: str,
        role: naming.RelationshipRole,
        kind: TypeKind = TypeKind.INPUT,
        description: Optional[str] = None,
        build: Build = None,
    ) -> GeneratedType:
        """{Owner}{Field}{Role}"""
        descriptor = TypeDescriptor(
            "relationship",
            (owner, field, role.value),
            naming.relationship_name(owner, field, role),
        )
        return self._intern(descriptor, kind, description, build)

    def union_member_type(
        self,
        owner: str,
        field: str,
        member: str,
        role: naming.RelationshipRole,
        build: Build = None,
    ) -> GeneratedType:
        """{Owner}{Field}{Member}{Role}"""
        descriptor = TypeDescriptor(
            "union_member",
            (owner, field, member, role.value),
            naming.union_member_name(owner, field, member, role),
        )
        return self._intern(descriptor, TypeKind.INPUT, None, build)

    def named_type(
        self,
        role: str,
        name: str,
        kind: TypeKind,
        description: Optional[str] = None,
        build: Build = None,
    ) -> GeneratedType:
        """A type whose name the caller derived, keyed by role and name."""
        return self._intern(TypeDescriptor(role, (name,), name), kind, description, build)
