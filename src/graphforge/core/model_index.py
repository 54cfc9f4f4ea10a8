"""
Model index - questions the compilers ask about the annotation model.

Answers come from the model alone, never from the registry, so a compiler can
tell whether a type will exist before anyone has built it.
"""

from __future__ import annotations

from functools import cached_property
from typing import Optional, Union

from .defs import (
    Cardinality,
    FieldDef,
    GraphDef,
    InterfaceDef,
    NestedOperation,
    NodeDef,
    QueryOptions,
    RelationshipDef,
    RelationshipPropertiesDef,
    TargetKind,
    TimestampOperation,
)
from .scalars import ScalarKind, capabilities_for, is_scalar_kind


Owner = Union[NodeDef, InterfaceDef]


class ModelIndex:
    """Read-only lookups over a validated GraphDef."""

    def __init__(self, graph: GraphDef):
        self.graph = graph

    # -------------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------------

    @staticmethod
    def sortable_fields(fields: tuple[FieldDef, ...]) -> list[FieldDef]:
        return [f for f in fields if not f.type_ref.is_list and f.sortable.by_value]

    @staticmethod
    def filterable_fields(fields: tuple[FieldDef, ...]) -> list[FieldDef]:
        return [f for f in fields if f.filterable.by_value]

    @staticmethod
    def readable_fields(fields: tuple[FieldDef, ...]) -> list[FieldDef]:
        return [f for f in fields if f.selectable.on_read]

    @staticmethod
    def aggregable_fields(fields: tuple[FieldDef, ...]) -> list[tuple[FieldDef, ScalarKind]]:
        """Non-list fields whose kind has aggregation selections."""
        result = []
        for f in fields:
            ref = f.type_ref
            if ref.is_list or not is_scalar_kind(ref.base):
                continue
            kind = ScalarKind(ref.base)
            if capabilities_for(kind).aggregable:
                result.append((f, kind))
        return result

    def aggregate_selection_fields(self, fields: tuple[FieldDef, ...]) -> list[tuple[FieldDef, ScalarKind]]:
        """Aggregable fields a client may select in an aggregate."""
        return [(f, kind) for f, kind in self.aggregable_fields(fields) if f.selectable.on_aggregate]

    def aggregation_filter_fields(self, fields: tuple[FieldDef, ...]) -> list[tuple[FieldDef, ScalarKind]]:
        """Aggregable fields a client may filter an aggregate by."""
        return [(f, kind) for f, kind in self.aggregable_fields(fields) if f.filterable.by_aggregate]

    def fields_of(self, name: str) -> tuple[FieldDef, ...]:
        match self.graph.kind_of(name):
            case TargetKind.NODE:
                return self.graph.node(name).fields
            case TargetKind.INTERFACE:
                return self.graph.interface(name).fields
            case TargetKind.RELATIONSHIP_PROPERTIES:
                return self.graph.properties(name).fields
            case _:
                return ()

    def has_sort(self, name: str) -> bool:
        return bool(self.sortable_fields(self.fields_of(name)))

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------

    def relationships_of(self, name: str) -> tuple[RelationshipDef, ...]:
        match self.graph.kind_of(name):
            case TargetKind.NODE:
                return self.graph.node(name).relationships
            case TargetKind.INTERFACE:
                return self.graph.interface(name).relationships
            case _:
                return ()

    def allows_any(self, name: str, operation: NestedOperation) -> bool:
        """Whether some relationship of the type allows the nested operation."""
        return any(rel.allows(operation) for rel in self.relationships_of(name))

    @cached_property
    def _targeted(self) -> frozenset[str]:
        names: set[str] = set()
        for _, rel in self.graph.iter_relationships():
            names.add(rel.target)
            if self.graph.kind_of(rel.target) == TargetKind.UNION:
                names.update(self.graph.union(rel.target).members)
        return frozenset(names)

    def is_target(self, name: str) -> bool:
        """Whether a relationship points at the type, directly or through a union."""
        return name in self._targeted

    def has_keyed_input(self, name: str, operation: NestedOperation) -> bool:
        """
        Whether {Type}ConnectInput / DeleteInput / DisconnectInput exists.

        Node delete inputs back the root delete mutation; every other keyed
        input is only reachable from a nested operation on the type.
        """
        if not self.allows_any(name, operation):
            return False
        kind = self.graph.kind_of(name)
        if kind == TargetKind.NODE and operation == NestedOperation.DELETE:
            return True
        return self.is_target(name)

    def declaring_interface(self, owner: Owner, rel: RelationshipDef) -> Optional[InterfaceDef]:
        """The interface that declares this relationship on a node, if any."""
        if not isinstance(owner, NodeDef):
            return None
        for iface_name in owner.implements:
            iface = self.graph.interface(iface_name)
            if iface.relationship(rel.name) is not None:
                return iface
        return None

    def supports_aggregation(self, owner: Owner, rel: RelationshipDef) -> bool:
        """Nested aggregation needs a node owner and a list of nodes."""
        return (
            isinstance(owner, NodeDef)
            and self.graph.kind_of(rel.target) == TargetKind.NODE
            and rel.cardinality == Cardinality.MANY
        )

    def aggregation_enabled(self, owner: Owner, rel: RelationshipDef) -> bool:
        return self.supports_aggregation(owner, rel) and rel.aggregate is not False

    # -------------------------------------------------------------------------
    # Relationship properties
    # -------------------------------------------------------------------------

    def properties_of(self, rel: RelationshipDef) -> Optional[RelationshipPropertiesDef]:
        return self.graph.properties(rel.properties) if rel.properties else None

    @staticmethod
    def edge_required(props: RelationshipPropertiesDef) -> bool:
        """A non-null user field without a default makes the edge input mandatory."""
        return any(
            not f.type_ref.nullable and not f.has_default
            for f in props.settable_fields(TimestampOperation.CREATE)
        )

    def owning_fields(self, props_name: str) -> list[str]:
        """Owner.field pairs that use a properties type, for its description."""
        return sorted(
            f"{owner.name}.{rel.name}"
            for owner, rel in self.graph.iter_relationships()
            if rel.properties == props_name
        )

    # -------------------------------------------------------------------------
    # Query toggles
    # -------------------------------------------------------------------------

    def query_options(self, name: str) -> QueryOptions:
        return self.graph.query_options(self.graph.entity(name))

    def has_connection(self, name: str) -> bool:
        """Top-level {Plural}Connection exists for the entity."""
        options = self.query_options(name)
        if self.graph.kind_of(name) == TargetKind.NODE:
            return options.read or options.aggregate
        if self.graph.kind_of(name) == TargetKind.INTERFACE:
            return options.read
        return False

    def has_top_level_aggregate(self, name: str) -> bool:
        return self.graph.kind_of(name) == TargetKind.NODE and self.query_options(name).aggregate
