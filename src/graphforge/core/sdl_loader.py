"""
SDL model surface - reads type definitions and their directives.

Supported directives:
    @node, @plural(value)                          on object types
    @relationshipProperties                        on object types used as edge payload
    @query(read, aggregate)                        on types, or on `extend schema`
    @mutation(operations)                          on node types
    @relationship(type, direction, properties,
                  aggregate, nestedOperations)     on node fields
    @declareRelationship                           on interface fields
    @id, @timestamp(operations), @default(value),
    @unique, @populatedBy(callback, operations)    on attribute fields
    @sortable(byValue), @filterable(byValue, byAggregate),
    @selectable(onRead, onAggregate),
    @settable(onCreate, onUpdate)                  on attribute fields

Example:
    type Movie @node {
        id: ID! @id
        title: String!
        actors: [Actor!]! @relationship(type: "ACTED_IN", direction: IN, properties: "ActedIn")
    }
"""

from __future__ import annotations

from typing import Any, Optional

from graphql import GraphQLSyntaxError, parse, value_from_ast_untyped
from graphql.language import (
    DirectiveDefinitionNode,
    DirectiveNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    UnionTypeDefinitionNode,
    print_ast,
)

from .errors import GraphConfigError

# directive argument name to record field name
_RELATIONSHIP_ARGS = {
    "type": "relationship",
    "direction": "direction",
    "properties": "properties",
    "aggregate": "aggregate",
    "nestedOperations": "nested_operations",
}

_TYPE_DIRECTIVES = frozenset({"node", "plural", "query", "mutation", "relationshipProperties"})
# field toggle directive to (record key, directive argument to record field)
_TOGGLES = {
    "sortable": ("sortable", {"byValue": "by_value"}),
    "filterable": ("filterable", {"byValue": "by_value", "byAggregate": "by_aggregate"}),
    "selectable": ("selectable", {"onRead": "on_read", "onAggregate": "on_aggregate"}),
    "settable": ("settable", {"onCreate": "on_create", "onUpdate": "on_update"}),
}

_FIELD_DIRECTIVES = frozenset({
    "relationship", "declareRelationship", "id", "timestamp", "default", "unique", "populatedBy", *_TOGGLES,
})


def sdl_to_dict(source: str) -> dict[str, Any]:
    """
    Parse SDL into the list form GraphDef validates.

    Raises:
        GraphConfigError: the SDL does not parse or uses an unknown directive
    """
    try:
        document = parse(source)
    except GraphQLSyntaxError as e:
        raise GraphConfigError(f"Invalid SDL model: {e.message}") from e

    data: dict[str, Any] = {
        "nodes": [],
        "interfaces": [],
        "unions": [],
        "relationship_properties": [],
        "enums": [],
        "scalars": [],
    }

    for definition in document.definitions:
        match definition:
            case ObjectTypeDefinitionNode():
                directives = _directives(definition.directives, _TYPE_DIRECTIVES, definition.name.value)
                if "relationshipProperties" in directives:
                    data["relationship_properties"].append(_properties(definition))
                else:
                    data["nodes"].append(_node(definition, directives))
            case InterfaceTypeDefinitionNode():
                directives = _directives(definition.directives, _TYPE_DIRECTIVES, definition.name.value)
                data["interfaces"].append(_interface(definition, directives))
            case UnionTypeDefinitionNode():
                directives = _directives(definition.directives, _TYPE_DIRECTIVES, definition.name.value)
                data["unions"].append(_with_common(
                    {"members": [t.name.value for t in definition.types or ()]},
                    definition,
                    directives,
                ))
            case EnumTypeDefinitionNode():
                data["enums"].append({
                    "name": definition.name.value,
                    "values": [v.name.value for v in definition.values or ()],
                    "description": _description(definition),
                })
            case ScalarTypeDefinitionNode():
                data["scalars"].append({"name": definition.name.value, "description": _description(definition)})
            case SchemaDefinitionNode() | SchemaExtensionNode():
                directives = _directives(definition.directives, frozenset({"query"}), "schema")
                if "query" in directives:
                    data["query"] = directives["query"]
            case DirectiveDefinitionNode():
                continue
            case _:
                raise GraphConfigError(f"Unsupported definition in SDL model: {print_ast(definition)[:60]}")

    return data


# =============================================================================
# Definitions
# =============================================================================


def _node(definition: ObjectTypeDefinitionNode, directives: dict[str, dict]) -> dict[str, Any]:
    node = _with_common({}, definition, directives)
    node["implements"] = [i.name.value for i in definition.interfaces or ()]
    node["fields"], node["relationships"] = _members(definition, "relationship")
    if "mutation" in directives:
        node["mutations"] = directives["mutation"].get("operations", [])
    return node


def _interface(definition: InterfaceTypeDefinitionNode, directives: dict[str, dict]) -> dict[str, Any]:
    iface = _with_common({}, definition, directives)
    iface["fields"], iface["relationships"] = _members(definition, "declareRelationship")
    return iface


def _properties(definition: ObjectTypeDefinitionNode) -> dict[str, Any]:
    fields, relationships = _members(definition, "relationship")
    if relationships:
        raise GraphConfigError(f"Relationship properties type '{definition.name.value}' cannot have relationships")
    return {"name": definition.name.value, "description": _description(definition), "fields": fields}


def _with_common(record: dict[str, Any], definition, directives: dict[str, dict]) -> dict[str, Any]:
    record = {"name": definition.name.value, "description": _description(definition), **record}
    if "plural" in directives:
        record["plural"] = directives["plural"].get("value")
    if "query" in directives:
        record["query"] = directives["query"]
    return record


def _members(definition, relationship_directive: str) -> tuple[list[dict], list[dict]]:
    """Split fields into attributes and relationships."""
    fields, relationships = [], []
    owner = definition.name.value
    for field_node in definition.fields or ():
        directives = _directives(field_node.directives, _FIELD_DIRECTIVES, f"{owner}.{field_node.name.value}")
        if relationship_directive in directives:
            relationships.append(_relationship(field_node, directives[relationship_directive]))
        elif "relationship" in directives or "declareRelationship" in directives:
            raise GraphConfigError(
                f"{owner}.{field_node.name.value}: use @{relationship_directive} on this type"
            )
        else:
            fields.append(_field(field_node, directives))
    return fields, relationships


def _field(field_node: FieldDefinitionNode, directives: dict[str, dict]) -> dict[str, Any]:
    record: dict[str, Any] = {
        "name": field_node.name.value,
        "type": print_ast(field_node.type),
        "description": _description(field_node),
    }
    if "id" in directives:
        record["id"] = True
    if "timestamp" in directives:
        record["timestamp"] = directives["timestamp"].get("operations", True)
    if "default" in directives:
        record["default"] = directives["default"].get("value")
    if "unique" in directives:
        record["unique"] = True
    if "populatedBy" in directives:
        record["populated_by"] = directives["populatedBy"]
    for name, (key, arguments) in _TOGGLES.items():
        if name in directives:
            record[key] = _toggle_arguments(name, directives[name], arguments, field_node.name.value)
    return record


def _relationship(field_node: FieldDefinitionNode, arguments: dict[str, Any]) -> dict[str, Any]:
    record: dict[str, Any] = {
        "name": field_node.name.value,
        "type": print_ast(field_node.type),
        "description": _description(field_node),
    }
    for name, value in arguments.items():
        if name not in _RELATIONSHIP_ARGS:
            raise GraphConfigError(f"Unknown @relationship argument '{name}' on {field_node.name.value}")
        record[_RELATIONSHIP_ARGS[name]] = value
    return record


# =============================================================================
# Helpers
# =============================================================================


def _directives(nodes: Optional[tuple[DirectiveNode, ...]], allowed: frozenset[str], location: str) -> dict[str, dict]:
    """Directive name to its arguments as plain Python values."""
    result = {}
    for directive in nodes or ():
        name = directive.name.value
        if name not in allowed:
            raise GraphConfigError(f"Unknown directive @{name} on {location}")
        result[name] = {
            arg.name.value: value_from_ast_untyped(arg.value)
            for arg in directive.arguments or ()
        }
    return result


def _toggle_arguments(directive: str, values: dict[str, Any], arguments: dict[str, str], field: str) -> dict[str, Any]:
    unknown = set(values) - set(arguments)
    if unknown:
        raise GraphConfigError(f"Unknown @{directive} argument '{sorted(unknown)[0]}' on {field}")
    return {arguments[name]: value for name, value in values.items()}


def _description(node) -> Optional[str]:
    return node.description.value if node.description else None
