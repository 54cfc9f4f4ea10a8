"""
Annotation model - validated definitions of the declarative graph model.

These records are what every compiler reads. They are frozen pydantic models,
validated once when built (by the YAML or SDL loaders, or directly in code).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Iterator, Optional, Union

from graphql import GraphQLSyntaxError, parse_type
from graphql.language import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Direction(str, Enum):
    IN = "IN"
    OUT = "OUT"


class Cardinality(str, Enum):
    ONE = "one"
    MANY = "many"


class NestedOperation(str, Enum):
    CONNECT = "CONNECT"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    DISCONNECT = "DISCONNECT"


class MutationOperation(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class TimestampOperation(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"


class TargetKind(str, Enum):
    """What a type name refers to in the model."""
    NODE = "node"
    INTERFACE = "interface"
    UNION = "union"
    RELATIONSHIP_PROPERTIES = "relationship_properties"
    ENUM = "enum"
    SCALAR = "scalar"


@dataclass(frozen=True)
class TypeRef:
    """
    Parsed GraphQL type reference.

    Examples:
        "String"      -> TypeRef("String", nullable=True)
        "[Float!]!"   -> TypeRef("Float", nullable=False, is_list=True, item_nullable=False)
    """
    base: str
    nullable: bool = True
    is_list: bool = False
    item_nullable: bool = True

    @classmethod
    def parse(cls, source: str) -> "TypeRef":
        try:
            node = parse_type(source)
        except GraphQLSyntaxError as e:
            raise ValueError(f"invalid type reference '{source}': {e.message}") from e
        return cls.from_node(node)

    @classmethod
    def from_node(cls, node: TypeNode) -> "TypeRef":
        nullable = True
        if isinstance(node, NonNullTypeNode):
            nullable, node = False, node.type

        if isinstance(node, NamedTypeNode):
            return cls(base=node.name.value, nullable=nullable)

        assert isinstance(node, ListTypeNode)
        item = node.type
        item_nullable = True
        if isinstance(item, NonNullTypeNode):
            item_nullable, item = False, item.type
        if not isinstance(item, NamedTypeNode):
            raise ValueError("nested list types are not supported")
        return cls(
            base=item.name.value,
            nullable=nullable,
            is_list=True,
            item_nullable=item_nullable,
        )

    def render(self) -> str:
        """Full type as declared, e.g. [Float!]!"""
        inner = self.base
        if self.is_list:
            inner = f"[{self.base}{'' if self.item_nullable else '!'}]"
        return inner if self.nullable else f"{inner}!"

    def render_nullable(self) -> str:
        """Type with the outer non-null dropped, used by filters and updates."""
        return TypeRef(self.base, True, self.is_list, self.item_nullable).render()


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


def _operations(value: Any, enum_cls: type[Enum]) -> Any:
    """Accept true/false, a single name or a list of names in any case."""
    if value is True:
        return frozenset(enum_cls)
    if value in (None, False):
        return frozenset()
    if isinstance(value, str):
        value = [value]
    return frozenset(v if isinstance(v, enum_cls) else enum_cls(str(v).upper()) for v in value)


def _toggle(value: Any, flags: tuple[str, ...]) -> Any:
    """A bare true/false sets every flag of a field toggle at once."""
    if isinstance(value, bool):
        return {flag: value for flag in flags}
    return value


class PopulatedByDef(_Record):
    """Value written by a named callback on create and/or update, never by the client."""
    callback: str
    operations: frozenset[TimestampOperation] = Field(default_factory=lambda: frozenset(TimestampOperation))

    @field_validator("operations", mode="before")
    @classmethod
    def _populated_operations(cls, value: Any) -> Any:
        return _operations(value, TimestampOperation)


class SortableOptions(_Record):
    by_value: bool = True


class FilterableOptions(_Record):
    by_value: bool = True
    by_aggregate: bool = True


class SelectableOptions(_Record):
    on_read: bool = True
    on_aggregate: bool = True


class SettableOptions(_Record):
    on_create: bool = True
    on_update: bool = True


class FieldDef(_Record):
    """Scalar, enum or user-scalar attribute of a node, interface or properties type."""
    name: str
    type: str
    id: bool = False
    timestamp: frozenset[TimestampOperation] = frozenset()
    populated_by: Optional[PopulatedByDef] = None
    default: Optional[Union[bool, int, float, str]] = None
    unique: bool = False
    description: Optional[str] = None
    sortable: SortableOptions = Field(default_factory=SortableOptions)
    filterable: FilterableOptions = Field(default_factory=FilterableOptions)
    selectable: SelectableOptions = Field(default_factory=SelectableOptions)
    settable: SettableOptions = Field(default_factory=SettableOptions)

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        TypeRef.parse(value)
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _timestamp_operations(cls, value: Any) -> Any:
        return _operations(value, TimestampOperation)

    @field_validator("sortable", "filterable", "selectable", "settable", mode="before")
    @classmethod
    def _bare_toggle(cls, value: Any, info: ValidationInfo) -> Any:
        return _toggle(value, tuple(_TOGGLE_FLAGS[info.field_name]))

    @property
    def type_ref(self) -> TypeRef:
        return TypeRef.parse(self.type)

    @property
    def is_generated(self) -> bool:
        """Auto-id and auto-timestamp fields are never client-settable."""
        return self.id or bool(self.timestamp)

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def settable_on(self, operation: TimestampOperation) -> bool:
        """Whether a client writes this field in a create or an update."""
        if self.is_generated:
            return False
        if self.populated_by is not None and operation in self.populated_by.operations:
            return False
        if operation == TimestampOperation.CREATE:
            return self.settable.on_create
        return self.settable.on_update


_TOGGLE_FLAGS = {
    "sortable": SortableOptions.model_fields,
    "filterable": FilterableOptions.model_fields,
    "selectable": SelectableOptions.model_fields,
    "settable": SettableOptions.model_fields,
}


class RelationshipDef(_Record):
    """
    Relationship field.

    `relationship` (the edge label) and `direction` are empty on fields declared
    by an interface; implementing nodes supply them.
    """
    name: str
    type: str
    relationship: Optional[str] = None
    direction: Optional[Direction] = None
    properties: Optional[str] = None
    aggregate: Optional[bool] = None
    nested_operations: frozenset[NestedOperation] = Field(default_factory=lambda: frozenset(NestedOperation))
    description: Optional[str] = None

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        TypeRef.parse(value)
        return value

    @field_validator("direction", mode="before")
    @classmethod
    def _direction_upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("nested_operations", mode="before")
    @classmethod
    def _nested_operations(cls, value: Any) -> Any:
        return _operations(value, NestedOperation)

    @property
    def type_ref(self) -> TypeRef:
        return TypeRef.parse(self.type)

    @property
    def target(self) -> str:
        return self.type_ref.base

    @property
    def cardinality(self) -> Cardinality:
        return Cardinality.MANY if self.type_ref.is_list else Cardinality.ONE

    @property
    def is_declaration(self) -> bool:
        return self.relationship is None

    def allows(self, operation: NestedOperation) -> bool:
        return operation in self.nested_operations


class QueryOptions(_Record):
    """Top-level query toggles. An explicit @query defaults to read without aggregate."""
    read: bool = True
    aggregate: bool = False


DEFAULT_QUERY_OPTIONS = QueryOptions(read=True, aggregate=True)


class NodeDef(_Record):
    name: str
    plural: Optional[str] = None
    description: Optional[str] = None
    fields: tuple[FieldDef, ...] = ()
    relationships: tuple[RelationshipDef, ...] = ()
    implements: tuple[str, ...] = ()
    query: Optional[QueryOptions] = None
    mutations: frozenset[MutationOperation] = Field(default_factory=lambda: frozenset(MutationOperation))

    @field_validator("mutations", mode="before")
    @classmethod
    def _mutations(cls, value: Any) -> Any:
        return _operations(value, MutationOperation)

    def field(self, name: str) -> Optional[FieldDef]:
        return next((f for f in self.fields if f.name == name), None)

    def relationship(self, name: str) -> Optional[RelationshipDef]:
        return next((r for r in self.relationships if r.name == name), None)

    def allows(self, operation: MutationOperation) -> bool:
        return operation in self.mutations


class InterfaceDef(_Record):
    name: str
    plural: Optional[str] = None
    description: Optional[str] = None
    fields: tuple[FieldDef, ...] = ()
    relationships: tuple[RelationshipDef, ...] = ()
    query: Optional[QueryOptions] = None

    def field(self, name: str) -> Optional[FieldDef]:
        return next((f for f in self.fields if f.name == name), None)

    def relationship(self, name: str) -> Optional[RelationshipDef]:
        return next((r for r in self.relationships if r.name == name), None)


class UnionDef(_Record):
    name: str
    plural: Optional[str] = None
    description: Optional[str] = None
    members: tuple[str, ...]
    query: Optional[QueryOptions] = None


class RelationshipPropertiesDef(_Record):
    name: str
    description: Optional[str] = None
    fields: tuple[FieldDef, ...] = ()

    def settable_fields(self, operation: TimestampOperation) -> tuple[FieldDef, ...]:
        """Edge fields a client writes on create or update."""
        return tuple(f for f in self.fields if f.settable_on(operation))


class EnumDef(_Record):
    name: str
    values: tuple[str, ...]
    description: Optional[str] = None


class ScalarDef(_Record):
    name: str
    description: Optional[str] = None


EntityDef = Union[NodeDef, InterfaceDef, UnionDef]


class GraphDef(_Record):
    """The complete declarative model; input to one build."""
    nodes: tuple[NodeDef, ...] = ()
    interfaces: tuple[InterfaceDef, ...] = ()
    unions: tuple[UnionDef, ...] = ()
    relationship_properties: tuple[RelationshipPropertiesDef, ...] = ()
    enums: tuple[EnumDef, ...] = ()
    scalars: tuple[ScalarDef, ...] = ()
    query: Optional[QueryOptions] = None

    @cached_property
    def _kinds(self) -> dict[str, TargetKind]:
        kinds: dict[str, TargetKind] = {}
        groups = (
            (self.scalars, TargetKind.SCALAR),
            (self.enums, TargetKind.ENUM),
            (self.relationship_properties, TargetKind.RELATIONSHIP_PROPERTIES),
            (self.unions, TargetKind.UNION),
            (self.interfaces, TargetKind.INTERFACE),
            (self.nodes, TargetKind.NODE),
        )
        for group, kind in groups:
            for definition in group:
                kinds.setdefault(definition.name, kind)
        return kinds

    def kind_of(self, name: str) -> Optional[TargetKind]:
        return self._kinds.get(name)

    def node(self, name: str) -> NodeDef:
        return next(n for n in self.nodes if n.name == name)

    def interface(self, name: str) -> InterfaceDef:
        return next(i for i in self.interfaces if i.name == name)

    def union(self, name: str) -> UnionDef:
        return next(u for u in self.unions if u.name == name)

    def properties(self, name: str) -> RelationshipPropertiesDef:
        return next(p for p in self.relationship_properties if p.name == name)

    def entity(self, name: str) -> EntityDef:
        match self.kind_of(name):
            case TargetKind.NODE:
                return self.node(name)
            case TargetKind.INTERFACE:
                return self.interface(name)
            case TargetKind.UNION:
                return self.union(name)
            case _:
                raise KeyError(name)

    def implementations(self, interface: str) -> tuple[NodeDef, ...]:
        return tuple(n for n in self.nodes if interface in n.implements)

    def iter_relationships(self) -> Iterator[tuple[Union[NodeDef, InterfaceDef], RelationshipDef]]:
        for owner in (*self.interfaces, *self.nodes):
            for rel in owner.relationships:
                yield owner, rel

    def query_options(self, entity: EntityDef) -> QueryOptions:
        """Effective top-level query toggles for an entity."""
        return entity.query or self.query or DEFAULT_QUERY_OPTIONS
