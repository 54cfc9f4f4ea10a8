"""
Graphforge - GraphQL schema augmentation for graph-backed services.

Turns a small declarative model (nodes, relationships, interfaces, unions)
into a complete query and mutation schema: filters, sorting, pagination,
aggregation, nested mutations and the deprecated flat mirrors.

Usage:
    from graphforge import build_schema, load_model

    graph = load_model("model.graphql")
    schema = build_schema(graph)
    print(schema.sdl)
"""

from __future__ import annotations

from .core import (
    BuildOptions,
    CapabilityError,
    CompilationError,
    CompilationResult,
    DeprecatedCategory,
    FieldCollisionError,
    FieldDef,
    GraphConfigError,
    GraphDef,
    GraphforgeError,
    GraphSchema,
    InterfaceDef,
    ModelError,
    NameCollisionError,
    NodeDef,
    RelationshipDef,
    RelationshipPropertiesDef,
    SchemaCompiler,
    SchemaLinkError,
    UnionDef,
    UnregisteredTypeError,
    build_schema,
    graph_from_dict,
    load_model,
)

__version__ = "0.1.0"

__all__ = [
    # Model
    "GraphDef",
    "NodeDef",
    "InterfaceDef",
    "UnionDef",
    "FieldDef",
    "RelationshipDef",
    "RelationshipPropertiesDef",
    "graph_from_dict",
    "load_model",
    # Build
    "BuildOptions",
    "DeprecatedCategory",
    "SchemaCompiler",
    "CompilationResult",
    "CompilationError",
    "GraphSchema",
    "build_schema",
    # Errors
    "GraphforgeError",
    "ModelError",
    "NameCollisionError",
    "FieldCollisionError",
    "CapabilityError",
    "UnregisteredTypeError",
    "SchemaLinkError",
    "GraphConfigError",
]
