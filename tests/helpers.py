"""
Assertion helpers over a built GraphSchema.

Structure is read from the linked graphql-core schema, deprecation reasons
from the generated types.
"""

from __future__ import annotations

from typing import Optional

from graphforge import GraphSchema


def field_names(schema: GraphSchema, type_name: str) -> list[str]:
    return sorted(schema.schema.get_type(type_name).fields)


def field_type(schema: GraphSchema, type_name: str, field: str) -> str:
    return str(schema.schema.get_type(type_name).fields[field].type)


def arg_names(schema: GraphSchema, type_name: str, field: str) -> list[str]:
    return sorted(schema.schema.get_type(type_name).fields[field].args)


def arg_type(schema: GraphSchema, type_name: str, field: str, arg: str) -> str:
    return str(schema.schema.get_type(type_name).fields[field].args[arg].type)


def deprecation(schema: GraphSchema, type_name: str, field: str) -> Optional[str]:
    return schema.types[type_name].field(field).deprecation


def canonical_fields(schema: GraphSchema, type_name: str) -> list[str]:
    """Fields that are not deprecated mirrors."""
    return sorted(f.name for f in schema.types[type_name].fields if not f.is_deprecated)
