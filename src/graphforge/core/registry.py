"""
Type registry - owns every generated type of one build.

Types are keyed by a structural descriptor. Interning the same descriptor twice
returns the first instance; a different descriptor that derives an already
taken name is a collision.

Usage:
    registry = TypeRegistry()
    filters = registry.intern(
        TypeDescriptor("scalar_filters", ("String",), "StringScalarFilters"),
        lambda name: GeneratedType(name, TypeKind.INPUT),
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from .errors import NameCollisionError, UnregisteredTypeError
from .schema_types import GeneratedType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Structural key of a generated type.

    Equality covers role and subject; the name is derived from them by a naming
    function and only travels along.
    """
    role: str
    subject: tuple = ()
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        subject = ", ".join(str(s) for s in self.subject)
        return f"{self.role}({subject})"


class TypeRegistry:
    """Per-build store of generated and declared types. Never shared between builds."""

    def __init__(self):
        self._types: dict[str, GeneratedType] = {}
        self._descriptors: dict[str, TypeDescriptor] = {}

    def intern(
        self,
        descriptor: TypeDescriptor,
        factory: Callable[[str], GeneratedType],
    ) -> GeneratedType:
        """
        Return the type for a descriptor, creating it on first use.

        Raises:
            NameCollisionError: another descriptor already owns the name
        """
        name = descriptor.name
        existing = self._descriptors.get(name)
        if existing is not None:
            if existing != descriptor:
                raise NameCollisionError(name, existing, descriptor)
            return self._types[name]

        generated = factory(name)
        self._store(descriptor, generated)
        return generated

    def declare(self, descriptor: TypeDescriptor, generated: GeneratedType) -> GeneratedType:
        """Register a type built by the caller, with the same collision check."""
        existing = self._descriptors.get(generated.name)
        if existing is not None:
            raise NameCollisionError(generated.name, existing, descriptor)
        self._store(descriptor, generated)
        return generated

    def _store(self, descriptor: TypeDescriptor, generated: GeneratedType):
        self._descriptors[generated.name] = descriptor
        self._types[generated.name] = generated
        logger.debug(f"Registered {generated.kind.value} {generated.name} for {descriptor}")

    def get(self, name: str) -> Optional[GeneratedType]:
        return self._types.get(name)

    def require(self, name: str, referenced_by: Optional[str] = None) -> GeneratedType:
        generated = self._types.get(name)
        if generated is None:
            raise UnregisteredTypeError(name, referenced_by)
        return generated

    def remove(self, name: str):
        """Drop a type that ended up empty."""
        self._types.pop(name, None)
        self._descriptors.pop(name, None)

    def descriptor_of(self, name: str) -> Optional[TypeDescriptor]:
        return self._descriptors.get(name)

    def types(self) -> list[GeneratedType]:
        """All types, sorted by name."""
        return [self._types[name] for name in sorted(self._types)]

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[GeneratedType]:
        return iter(self.types())

    def __len__(self) -> int:
        return len(self._types)
