"""
Resolver info - what an execution layer needs to resolve the generated fields.

Keyed by "Parent.field", e.g. "Query.movies" or "Movie.actors".
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional, Union

from .defs import GraphDef, NodeDef, TimestampOperation


class RootOperationKind(str, Enum):
    READ = "read"
    CONNECTION = "connection"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class RootFieldInfo:
    """A Query or Mutation field and the entity it works on."""
    parent: str
    field: str
    operation: RootOperationKind
    entity: str
    unique_fields: tuple[str, ...] = ()
    populated_by: tuple[tuple[str, str], ...] = ()

    @property
    def key(self) -> str:
        return f"{self.parent}.{self.field}"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["operation"] = self.operation.value
        data["unique_fields"] = list(self.unique_fields)
        data["populated_by"] = dict(self.populated_by)
        return data


@dataclass(frozen=True)
class RelationshipInfo:
    """Edge label and direction behind a relationship field."""
    owner: str
    field: str
    target: str
    cardinality: str
    relationship: Optional[str] = None
    direction: Optional[str] = None
    properties: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.owner}.{self.field}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


ResolverInfo = Union[RootFieldInfo, RelationshipInfo]


def unique_fields(node: NodeDef) -> tuple[str, ...]:
    """Fields that identify a single node: auto-ids and @unique fields."""
    return tuple(f.name for f in node.fields if f.id or f.unique)


def populated_fields(node: NodeDef, operation: TimestampOperation) -> tuple[tuple[str, str], ...]:
    """(field, callback) pairs a mutation fills in before writing."""
    return tuple(
        (f.name, f.populated_by.callback)
        for f in node.fields
        if f.populated_by is not None and operation in f.populated_by.operations
    )


def relationship_info(graph: GraphDef) -> list[RelationshipInfo]:
    return [
        RelationshipInfo(
            owner=owner.name,
            field=rel.name,
            target=rel.target,
            cardinality=rel.cardinality.value,
            relationship=rel.relationship,
            direction=rel.direction.value if rel.direction else None,
            properties=rel.properties,
        )
        for owner, rel in graph.iter_relationships()
    ]
