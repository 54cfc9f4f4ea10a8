"""
Model validator - checks a GraphDef before any type is generated.

Collects every problem in one pass so a user sees all of them at once.

Usage:
    validator = ModelValidator(graph)
    errors = validator.validate()   # [] when the model is sound
"""

from __future__ import annotations

from collections import Counter
from typing import Optional, Union

from . import deprecated, naming
from .defs import (
    Cardinality,
    FieldDef,
    GraphDef,
    InterfaceDef,
    NestedOperation,
    NodeDef,
    RelationshipDef,
    RelationshipPropertiesDef,
    TargetKind,
)
from .errors import CompilationError
from .model_index import ModelIndex
from .scalars import ScalarKind, is_scalar_kind


TEMPORAL_KINDS = frozenset({
    ScalarKind.DATE_TIME.value,
    ScalarKind.LOCAL_DATE_TIME.value,
    ScalarKind.TIME.value,
    ScalarKind.LOCAL_TIME.value,
})

RELATIONSHIP_TARGET_KINDS = (TargetKind.NODE, TargetKind.INTERFACE, TargetKind.UNION)


class ModelValidator:
    """
    Validates the annotation model.

    Checks:
    - Type names are unique across every kind of definition
    - Field types resolve to a scalar kind, enum or custom scalar
    - Markers fit their field (@id on ID, @timestamp on temporal, @unique on non-list)
    - Field names stay clear of generated filters and legacy mirrors
    - @populatedBy sits on a plain scalar field of a node or properties type
    - Relationship targets and properties types exist and have the right kind
    - Interfaces are fully implemented, union members are nodes
    - @query is set at graph level or type level, never both
    """

    def __init__(self, graph: GraphDef):
        self.graph = graph
        self.errors: list[CompilationError] = []

    def validate(self) -> list[CompilationError]:
        self.errors = []

        self._validate_type_names()
        self._validate_query_options()
        self._validate_query_root()

        for owner in (*self.graph.interfaces, *self.graph.nodes):
            self._validate_member_names(owner)
            for f in owner.fields:
                self._validate_field(owner.name, f)
            for rel in owner.relationships:
                self._validate_relationship(owner, rel)
            self._validate_relationship_uniqueness(owner)

        for node in self.graph.nodes:
            if not node.fields and not node.relationships:
                self._add_error("Node defines no fields", entity=node.name)
            elif not ModelIndex.readable_fields(node.fields) and not node.relationships:
                self._add_error("Node has no readable fields", entity=node.name)
            self._validate_implements(node)

        for iface in self.graph.interfaces:
            if not self.graph.implementations(iface.name):
                self._add_error("Interface has no implementations", entity=iface.name)
            if not ModelIndex.readable_fields(iface.fields) and not iface.relationships:
                self._add_error("Interface has no readable fields", entity=iface.name)
            for f in iface.fields:
                if f.populated_by is not None:
                    self._add_error(
                        "@populatedBy can only be used on fields of nodes and relationship properties types",
                        entity=iface.name,
                        field=f.name,
                    )

        for props in self.graph.relationship_properties:
            if not props.fields:
                self._add_error("Relationship properties type has no fields", entity=props.name)
            elif not ModelIndex.readable_fields(props.fields):
                self._add_error("Relationship properties type has no readable fields", entity=props.name)
            self._validate_member_names(props)
            for f in props.fields:
                self._validate_field(props.name, f)

        for union in self.graph.unions:
            if not union.members:
                self._add_error("Union has no members", entity=union.name)
            for member in union.members:
                if self.graph.kind_of(member) != TargetKind.NODE:
                    self._add_error(f"Union member '{member}' is not a node", entity=union.name)

        for enum in self.graph.enums:
            if not enum.values:
                self._add_error("Enum has no values", entity=enum.name)

        return self.errors

    def _add_error(
        self,
        message: str,
        entity: Optional[str] = None,
        field: Optional[str] = None,
    ):
        """Add a validation error."""
        self.errors.append(CompilationError(
            entity=entity,
            field=field,
            message=message,
        ))

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    def _validate_type_names(self):
        names = Counter(
            d.name
            for group in (
                self.graph.nodes,
                self.graph.interfaces,
                self.graph.unions,
                self.graph.relationship_properties,
                self.graph.enums,
                self.graph.scalars,
            )
            for d in group
        )
        for name, count in sorted(names.items()):
            if count > 1:
                self._add_error(f"Type '{name}' is defined {count} times", entity=name)
            if is_scalar_kind(name):
                self._add_error(f"Type name '{name}' shadows a built-in scalar", entity=name)

    def _validate_query_options(self):
        if self.graph.query is None:
            return
        entities = (*self.graph.nodes, *self.graph.interfaces, *self.graph.unions)
        for entity in entities:
            if entity.query is not None:
                self._add_error(
                    "Invalid directive usage: Directive @query can only be used in one location: "
                    "either schema or type.",
                    entity=entity.name,
                )

    def _validate_query_root(self):
        """A schema needs at least one Query field."""
        entities = (*self.graph.nodes, *self.graph.interfaces, *self.graph.unions)
        if not self.graph.nodes:
            self._add_error("Model defines no nodes")
            return
        for entity in entities:
            options = self.graph.query_options(entity)
            if options.read or (isinstance(entity, NodeDef) and options.aggregate):
                return
        self._add_error("No type allows reads or aggregation, the Query type would be empty")

    # -------------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------------

    def _validate_member_names(self, owner: Union[NodeDef, InterfaceDef, RelationshipPropertiesDef]):
        relationships = getattr(owner, "relationships", [])
        names = Counter(
            [f.name for f in owner.fields] + [r.name for r in relationships]
        )
        for name, count in sorted(names.items()):
            if count > 1:
                self._add_error("Field is defined more than once", entity=owner.name, field=name)

        reserved = set(naming.LOGICAL_OPERATORS)
        if isinstance(owner, InterfaceDef):
            reserved.add(naming.TYPENAME_FILTER)
        for name in sorted(names):
            if name in reserved:
                self._add_error(
                    f"Field name '{name}' is reserved for generated filters", entity=owner.name, field=name
                )

        generated: dict[str, str] = {}
        for f in owner.fields:
            for derived in deprecated.generated_names(f.name, is_relationship=False):
                generated.setdefault(derived, f.name)
        for rel in relationships:
            for derived in deprecated.generated_names(rel.name, is_relationship=True):
                generated.setdefault(derived, rel.name)
        for name in sorted(names):
            if name in generated:
                self._add_error(
                    f"Field name collides with the field '{name}' generated for '{generated[name]}'",
                    entity=owner.name,
                    field=name,
                )

    def _validate_field(self, owner: str, f: FieldDef):
        ref = f.type_ref
        kind = self.graph.kind_of(ref.base)

        if not is_scalar_kind(ref.base) and kind not in (TargetKind.ENUM, TargetKind.SCALAR):
            if kind in RELATIONSHIP_TARGET_KINDS:
                self._add_error(
                    f"Field of type '{ref.base}' must be declared as a relationship",
                    entity=owner,
                    field=f.name,
                )
            else:
                self._add_error(f"Unknown type '{ref.base}'", entity=owner, field=f.name)

        if f.id and ref.base != ScalarKind.ID.value:
            self._add_error("@id can only be used on fields of type ID", entity=owner, field=f.name)
        if f.timestamp and ref.base not in TEMPORAL_KINDS:
            self._add_error(
                f"@timestamp can only be used on {', '.join(sorted(TEMPORAL_KINDS))} fields",
                entity=owner,
                field=f.name,
            )
        if (f.id or f.timestamp) and ref.is_list:
            self._add_error("Generated fields cannot be lists", entity=owner, field=f.name)
        if f.unique and ref.is_list:
            self._add_error("@unique cannot be used on list fields", entity=owner, field=f.name)
        if f.has_default and f.is_generated:
            self._add_error("Generated fields cannot have a default value", entity=owner, field=f.name)
        if f.has_default and ref.is_list:
            self._add_error("List fields cannot have a default value", entity=owner, field=f.name)
        if f.populated_by is not None:
            self._validate_populated_by(owner, f)

    def _validate_populated_by(self, owner: str, f: FieldDef):
        populated_by = f.populated_by
        for marker, present in (("id", f.id), ("timestamp", bool(f.timestamp)), ("default", f.has_default)):
            if present:
                self._add_error(
                    f"Invalid directive usage: Directive @populatedBy cannot be used in combination with @{marker}",
                    entity=owner,
                    field=f.name,
                )
        if not is_scalar_kind(f.type_ref.base):
            self._add_error(
                f"@populatedBy can only be used on fields of type {', '.join(kind.value for kind in ScalarKind)}",
                entity=owner,
                field=f.name,
            )
        if not populated_by.callback:
            self._add_error("@populatedBy needs a callback name", entity=owner, field=f.name)
        if not populated_by.operations:
            self._add_error("@populatedBy needs at least one of CREATE or UPDATE", entity=owner, field=f.name)

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------

    def _validate_relationship(self, owner: Union[NodeDef, InterfaceDef], rel: RelationshipDef):
        target_kind = self.graph.kind_of(rel.target)

        if target_kind is None:
            self._add_error(f"Unknown relationship target '{rel.target}'", entity=owner.name, field=rel.name)
        elif target_kind not in RELATIONSHIP_TARGET_KINDS:
            self._add_error(
                f"Relationship target '{rel.target}' must be a node, interface or union",
                entity=owner.name,
                field=rel.name,
            )

        if isinstance(owner, NodeDef):
            if rel.is_declaration:
                self._add_error("Relationship is missing its type", entity=owner.name, field=rel.name)
            if rel.direction is None:
                self._add_error("Relationship is missing its direction", entity=owner.name, field=rel.name)
        elif not rel.is_declaration:
            self._add_error(
                "Interface relationships are declared without a type; implementations supply it",
                entity=owner.name,
                field=rel.name,
            )

        if rel.properties:
            props_kind = self.graph.kind_of(rel.properties)
            if props_kind is None:
                self._add_error(
                    f"Unknown relationship properties type '{rel.properties}'",
                    entity=owner.name,
                    field=rel.name,
                )
            elif props_kind != TargetKind.RELATIONSHIP_PROPERTIES:
                self._add_error(
                    f"Properties type '{rel.properties}' must be declared as relationship properties",
                    entity=owner.name,
                    field=rel.name,
                )
            if target_kind == TargetKind.UNION:
                self._add_error(
                    "Relationship properties are not supported on union targets",
                    entity=owner.name,
                    field=rel.name,
                )

        required_one = rel.cardinality == Cardinality.ONE and not rel.type_ref.nullable
        if required_one and not (rel.allows(NestedOperation.CREATE) or rel.allows(NestedOperation.CONNECT)):
            self._add_error(
                "Required relationship must allow at least one of CREATE or CONNECT",
                entity=owner.name,
                field=rel.name,
            )

    def _validate_relationship_uniqueness(self, owner: Union[NodeDef, InterfaceDef]):
        seen: dict[tuple, str] = {}
        for rel in owner.relationships:
            if rel.is_declaration:
                continue
            key = (rel.target, rel.relationship, rel.direction)
            if key in seen:
                self._add_error(
                    f"Multiple relationship fields with the same type and direction may not have the "
                    f"same relationship type (shared with '{seen[key]}')",
                    entity=owner.name,
                    field=rel.name,
                )
            else:
                seen[key] = rel.name

    # -------------------------------------------------------------------------
    # Interfaces
    # -------------------------------------------------------------------------

    def _validate_implements(self, node: NodeDef):
        for iface_name in node.implements:
            kind = self.graph.kind_of(iface_name)
            if kind != TargetKind.INTERFACE:
                self._add_error(f"'{iface_name}' is not an interface", entity=node.name)
                continue

            iface = self.graph.interface(iface_name)
            node_fields = {f.name: f for f in node.fields}
            for f in iface.fields:
                if f.name not in node_fields:
                    self._add_error(
                        f"Missing field declared by interface '{iface_name}'",
                        entity=node.name,
                        field=f.name,
                    )
                elif node_fields[f.name].type != f.type:
                    self._add_error(
                        f"Field must have type '{f.type}' as declared by '{iface_name}'",
                        entity=node.name,
                        field=f.name,
                    )
                elif f.selectable.on_read and not node_fields[f.name].selectable.on_read:
                    self._add_error(
                        f"Field must stay readable as declared by '{iface_name}'",
                        entity=node.name,
                        field=f.name,
                    )

            for declared in iface.relationships:
                rel = node.relationship(declared.name)
                if rel is None:
                    self._add_error(
                        f"Missing relationship declared by interface '{iface_name}'",
                        entity=node.name,
                        field=declared.name,
                    )
                elif rel.type_ref != declared.type_ref:
                    self._add_error(
                        f"Relationship must have type '{declared.type}' as declared by '{iface_name}'",
                        entity=node.name,
                        field=declared.name,
                    )
                elif rel.properties != declared.properties:
                    self._add_error(
                        f"Relationship properties must be '{declared.properties}' as declared by '{iface_name}'",
                        entity=node.name,
                        field=declared.name,
                    )
