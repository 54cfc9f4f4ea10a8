"""
Generated type structures.

A GeneratedType is the compiler's view of one SDL definition. Types refer to
each other by name only; the registry owns the instances.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from graphql.language.print_string import print_string

from .errors import FieldCollisionError


class TypeKind(str, Enum):
    OBJECT = "type"
    INPUT = "input"
    ENUM = "enum"
    INTERFACE = "interface"
    UNION = "union"
    SCALAR = "scalar"


_TYPE_NAME_PATTERN = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")


def named_type(type_ref: str) -> str:
    """Base name of a type reference: [Movie!]! -> Movie"""
    match = _TYPE_NAME_PATTERN.search(type_ref)
    return match.group(0) if match else type_ref


def render_literal(value: Any, is_enum: bool = False) -> str:
    """Render a Python value as a GraphQL literal for defaults."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if is_enum:
        return str(value)
    return print_string(str(value))


@dataclass
class ArgumentSpec:
    name: str
    type: str
    default: Optional[str] = None
    description: Optional[str] = None


@dataclass
class FieldSpec:
    """Field of an object, interface or input type."""
    name: str
    type: str
    args: list[ArgumentSpec] = field(default_factory=list)
    description: Optional[str] = None
    deprecation: Optional[str] = None
    default: Optional[str] = None

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation is not None


@dataclass
class EnumValueSpec:
    name: str
    description: Optional[str] = None
    deprecation: Optional[str] = None


@dataclass
class GeneratedType:
    """
    One named type of the output schema.

    `fields` keeps insertion order; the assembler sorts at print time.
    """
    name: str
    kind: TypeKind
    description: Optional[str] = None
    fields: list[FieldSpec] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)
    values: list[EnumValueSpec] = field(default_factory=list)

    def add_field(
        self,
        name: str,
        type: str,
        description: Optional[str] = None,
        deprecation: Optional[str] = None,
        args: Optional[list[ArgumentSpec]] = None,
        default: Optional[str] = None,
    ) -> FieldSpec:
        """
        Append a field. Adding an identical field again is a no-op.

        Raises:
            FieldCollisionError: a different field already has this name
        """
        spec = FieldSpec(
            name=name,
            type=type,
            args=args or [],
            description=description,
            deprecation=deprecation,
            default=default,
        )
        existing = self.field(name)
        if existing is not None:
            if existing != spec:
                raise FieldCollisionError(self.name, name)
            return existing
        self.fields.append(spec)
        return spec

    def add_value(self, name: str, description: Optional[str] = None) -> EnumValueSpec:
        spec = EnumValueSpec(name=name, description=description)
        self.values.append(spec)
        return spec

    def field(self, name: str) -> Optional[FieldSpec]:
        return next((f for f in self.fields if f.name == name), None)

    def has_field(self, name: str) -> bool:
        return self.field(name) is not None

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def is_empty(self) -> bool:
        return not (self.fields or self.members or self.values)

    def referenced_types(self) -> Iterator[str]:
        """Every type name this definition points at."""
        yield from self.interfaces
        yield from self.members
        for f in self.fields:
            yield named_type(f.type)
            for arg in f.args:
                yield named_type(arg.type)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form, used by the schema endpoints."""
        data = asdict(self)
        data["kind"] = self.kind.value
        return data
