"""
Schema compiler - turns an annotation model into a linked GraphQL schema.

Validates the model, then runs the compiler passes against a fresh registry:
entities, relationships, finalize, root operations, assembly.

Usage:
    from graphforge.core.compiler import SchemaCompiler, build_schema

    result = SchemaCompiler(graph).compile()
    if not result.success:
        for message in result.error_messages():
            print(message)

    schema = build_schema(graph)     # raises on any error
    print(schema.sdl)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .assembler import GraphSchema, SchemaAssembler
from .context import BuildContext
from .defs import GraphDef
from .entity_compiler import EntityCompiler
from .errors import CompilationError, GraphforgeError, ModelError
from .options import BuildOptions
from .relationship_compiler import RelationshipCompiler
from .resolver_info import relationship_info
from .root_compiler import RootCompiler
from .validator import ModelValidator

logger = logging.getLogger(__name__)

__all__ = [
    "CompilationError",
    "CompilationResult",
    "SchemaCompiler",
    "build_schema",
]


@dataclass
class CompilationResult:
    """Result of compilation."""
    success: bool
    schema: Optional[GraphSchema] = None
    errors: list[CompilationError] = field(default_factory=list)

    def error_messages(self) -> list[str]:
        """Get all error messages as strings."""
        return [str(e) for e in self.errors]


class SchemaCompiler:
    """
    Compiles a GraphDef into a GraphSchema.

    Every build gets its own registry; a compiler instance can be reused but
    never shares state between builds.
    """

    def __init__(self, graph: GraphDef, options: Optional[BuildOptions] = None):
        self.graph = graph
        self.options = options or BuildOptions()
        self.errors: list[CompilationError] = []

    def compile(self) -> CompilationResult:
        """Build and report errors instead of raising them."""
        self.errors = []
        try:
            schema = self.build()
        except ModelError as e:
            self.errors = list(e.errors)
        except GraphforgeError as e:
            self._add_error(str(e))
        else:
            return CompilationResult(success=True, schema=schema)

        return CompilationResult(success=False, schema=None, errors=self.errors)

    def build(self) -> GraphSchema:
        """
        Build the schema.

        Raises:
            ModelError: the model failed validation
            NameCollisionError: two descriptors derived the same type name
            CapabilityError: an option asked a kind for an unsupported operator
            UnregisteredTypeError: a generated type references an unknown name
            SchemaLinkError: graphql-core rejected the result
        """
        errors = ModelValidator(self.graph).validate()
        if errors:
            raise ModelError(errors)

        ctx = BuildContext.create(self.graph, self.options)
        ctx.scalars.declare_model_types()

        entities = EntityCompiler(ctx)
        for props in self.graph.relationship_properties:
            entities.compile_properties(props)
        for iface in self.graph.interfaces:
            entities.compile_interface(iface)
        for node in self.graph.nodes:
            entities.compile_node(node)
        for union in self.graph.unions:
            entities.compile_union(union)

        relationships = RelationshipCompiler(ctx)
        for owner, rel in self.graph.iter_relationships():
            relationships.compile(owner, rel)

        entities.finalize()
        root_info = RootCompiler(ctx).compile()

        schema = SchemaAssembler(ctx.registry).assemble([*root_info, *relationship_info(self.graph)])
        logger.info(
            f"Built schema: {len(self.graph.nodes)} nodes, {len(schema.types)} types, "
            f"{len(schema.resolver_info)} resolver entries"
        )
        return schema

    def _add_error(
        self,
        message: str,
        entity: Optional[str] = None,
        field: Optional[str] = None,
    ):
        """Add a compilation error."""
        self.errors.append(CompilationError(
            entity=entity,
            field=field,
            message=message,
        ))


def build_schema(graph: GraphDef, options: Optional[BuildOptions] = None) -> GraphSchema:
    """Build a schema, raising the first error."""
    return SchemaCompiler(graph, options).build()
