"""
Core module - annotation model, compilers and schema assembly.
"""

from __future__ import annotations

from .assembler import GraphSchema, SchemaAssembler
from .compiler import (
    CompilationError,
    CompilationResult,
    SchemaCompiler,
    build_schema,
)
from .defs import (
    Cardinality,
    Direction,
    EnumDef,
    FieldDef,
    GraphDef,
    InterfaceDef,
    MutationOperation,
    NestedOperation,
    NodeDef,
    PopulatedByDef,
    QueryOptions,
    RelationshipDef,
    RelationshipPropertiesDef,
    ScalarDef,
    TargetKind,
    TimestampOperation,
    TypeRef,
    UnionDef,
)
from .errors import (
    CapabilityError,
    FieldCollisionError,
    GraphConfigError,
    GraphforgeError,
    ModelError,
    NameCollisionError,
    SchemaLinkError,
    UnknownScalarKindError,
    UnregisteredTypeError,
)
from .loader import graph_from_dict, load_model, load_sdl_model, load_yaml_model
from .options import BuildOptions, DeprecatedCategory
from .registry import TypeDescriptor, TypeRegistry
from .resolver_info import RelationshipInfo, RootFieldInfo, RootOperationKind
from .scalars import Capabilities, ScalarKind, capabilities_for
from .schema_types import ArgumentSpec, EnumValueSpec, FieldSpec, GeneratedType, TypeKind
from .validator import ModelValidator
