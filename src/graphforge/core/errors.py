"""
Custom exceptions for the graphforge build.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompilationError:
    """Single model or compilation error."""
    entity: Optional[str]
    field: Optional[str]
    message: str

    def __str__(self) -> str:
        parts = []
        if self.entity:
            parts.append(self.entity)
        if self.field:
            parts.append(self.field)
        location = ".".join(parts) if parts else "global"
        return f"[{location}] {self.message}"


class GraphforgeError(Exception):
    """Base exception for all graphforge errors."""
    pass


class ModelError(GraphforgeError):
    """Raised when the annotation model fails validation."""

    def __init__(self, errors: list[CompilationError]):
        self.errors = errors
        details = "\n".join(str(e) for e in errors)
        super().__init__(f"Model validation failed:\n{details}")


class NameCollisionError(GraphforgeError):
    """Raised when two distinct descriptors derive the same type name."""

    def __init__(self, name: str, existing: object, incoming: object):
        self.name = name
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Generated type name '{name}' is claimed by {existing} and {incoming}"
        )


class FieldCollisionError(GraphforgeError):
    """Raised when two different fields claim one name on a generated type."""

    def __init__(self, type_name: str, field: str):
        self.type_name = type_name
        self.field = field
        super().__init__(f"Field '{type_name}.{field}' is generated twice with different definitions")


class CapabilityError(GraphforgeError):
    """Raised when a scalar kind is asked for an operator it does not support."""

    def __init__(self, kind: str, operator: str):
        self.kind = kind
        self.operator = operator
        super().__init__(f"Scalar kind '{kind}' does not support operator '{operator}'")


class UnknownScalarKindError(GraphforgeError):
    """Raised when a field refers to a scalar kind that is not registered."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown scalar kind '{kind}'")


class UnregisteredTypeError(GraphforgeError):
    """Raised when the assembler finds a reference to a type nobody registered."""

    def __init__(self, name: str, referenced_by: Optional[str] = None):
        self.name = name
        self.referenced_by = referenced_by
        super().__init__(
            f"Type '{name}' is referenced{f' by {referenced_by}' if referenced_by else ''} "
            f"but was never registered"
        )


class SchemaLinkError(GraphforgeError):
    """Raised when graphql-core rejects the assembled schema."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Schema linking failed: {errors}")


class GraphConfigError(GraphforgeError):
    """Raised when project configuration or a model file is invalid."""
    pass
