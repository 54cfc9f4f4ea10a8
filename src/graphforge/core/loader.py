"""
Model loader - reads a model file into a GraphDef.

YAML models are keyed by type name; SDL models use the directive surface
(see sdl_loader). Both end in the same pydantic validation, whose errors are
reported as ModelError with the offending type and field.

YAML example:
    nodes:
      Movie:
        fields:
          id: {type: ID!, id: true}
          title: String!
          updatedBy: {type: String, populated_by: {callback: currentUser, operations: [UPDATE]}}
          rating: {type: Float, sortable: false, selectable: {on_aggregate: false}}
        relationships:
          actors: {type: "[Actor!]!", relationship: ACTED_IN, direction: IN, properties: ActedIn}
      Actor:
        fields:
          name: String!
    relationship_properties:
      ActedIn:
        fields:
          screenTime: Int!

Usage:
    from graphforge.core.loader import load_model

    graph = load_model("model.yaml")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .defs import GraphDef
from .errors import CompilationError, GraphConfigError, ModelError
from .sdl_loader import sdl_to_dict

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
SDL_SUFFIXES = (".graphql", ".graphqls", ".gql")

_GROUPS = ("nodes", "interfaces", "unions", "relationship_properties", "enums", "scalars")
_MEMBERS = ("fields", "relationships")


def load_model(path: Path | str) -> GraphDef:
    """
    Load a model file, choosing the format by extension.

    Raises:
        GraphConfigError: the file is missing, unreadable or not parseable
        ModelError: the model does not validate
    """
    path = Path(path)
    if not path.exists():
        raise GraphConfigError(f"Model file not found: {path}")

    source = path.read_text()
    suffix = path.suffix.lower()
    logger.debug(f"Loading model from {path}")

    if suffix in YAML_SUFFIXES:
        return load_yaml_model(source)
    if suffix in SDL_SUFFIXES:
        return load_sdl_model(source)

    raise GraphConfigError(
        f"Unsupported model file '{path.name}', expected one of {', '.join(YAML_SUFFIXES + SDL_SUFFIXES)}"
    )


def load_yaml_model(source: str) -> GraphDef:
    try:
        data = yaml.safe_load(source) or {}
    except yaml.YAMLError as e:
        raise GraphConfigError(f"Invalid YAML model: {e}") from e

    if not isinstance(data, dict):
        raise GraphConfigError("YAML model must be a mapping")
    return graph_from_dict(normalize_yaml(data))


def load_sdl_model(source: str) -> GraphDef:
    return graph_from_dict(sdl_to_dict(source))


def graph_from_dict(data: dict[str, Any]) -> GraphDef:
    """Validate a model in list form (every definition carries its name)."""
    try:
        return GraphDef.model_validate(data)
    except ValidationError as e:
        raise ModelError(validation_errors(e, data)) from e


# =============================================================================
# YAML shape
# =============================================================================


def normalize_yaml(data: dict[str, Any]) -> dict[str, Any]:
    """
    Turn name-keyed mappings into the list form GraphDef expects.

    Shorthands:
        fields: {title: String!}       -> [{name: title, type: String!}]
        enums: {Genre: [ACTION]}       -> [{name: Genre, values: [ACTION]}]
        scalars: {Url: null}           -> [{name: Url}]
    """
    unknown = set(data) - set(_GROUPS) - {"query"}
    if unknown:
        raise GraphConfigError(f"Unknown top-level keys in model: {', '.join(sorted(unknown))}")

    result: dict[str, Any] = {}
    if "query" in data:
        result["query"] = data["query"]

    for group in _GROUPS:
        definitions = data.get(group) or {}
        if isinstance(definitions, list):
            result[group] = definitions
            continue
        if not isinstance(definitions, dict):
            raise GraphConfigError(f"'{group}' must be a mapping of name to definition")
        result[group] = [_definition(group, name, body) for name, body in definitions.items()]

    return result


def _definition(group: str, name: str, body: Any) -> dict[str, Any]:
    if body is None:
        body = {}
    if group == "enums" and isinstance(body, list):
        body = {"values": body}
    if group == "unions" and isinstance(body, list):
        body = {"members": body}
    if not isinstance(body, dict):
        raise GraphConfigError(f"Definition of '{name}' in '{group}' must be a mapping")

    definition = {"name": name, **body}
    for member in _MEMBERS:
        entries = definition.get(member)
        if isinstance(entries, dict):
            definition[member] = [_member(field_name, value) for field_name, value in entries.items()]
    return definition


def _member(name: str, value: Any) -> dict[str, Any]:
    if isinstance(value, str):
        return {"name": name, "type": value}
    if isinstance(value, dict):
        return {"name": name, **value}
    raise GraphConfigError(f"Field '{name}' must be a type string or a mapping")


# =============================================================================
# Validation errors
# =============================================================================


def validation_errors(error: ValidationError, data: dict[str, Any]) -> list[CompilationError]:
    """Map pydantic errors onto the type and field they came from."""
    errors = []
    for item in error.errors():
        loc = item.get("loc", ())
        entity, field = _locate(data, loc)
        path = ".".join(str(part) for part in loc)
        errors.append(CompilationError(entity=entity, field=field, message=f"{path}: {item.get('msg')}"))
    return errors


def _locate(data: dict[str, Any], loc: tuple) -> tuple[Optional[str], Optional[str]]:
    entity = field = None
    if len(loc) >= 2 and loc[0] in _GROUPS and isinstance(loc[1], int):
        definitions = data.get(loc[0]) or []
        if loc[1] < len(definitions) and isinstance(definitions[loc[1]], dict):
            definition = definitions[loc[1]]
            entity = definition.get("name")
            if len(loc) >= 4 and loc[2] in _MEMBERS and isinstance(loc[3], int):
                members = definition.get(loc[2]) or []
                if loc[3] < len(members) and isinstance(members[loc[3]], dict):
                    field = members[loc[3]].get("name")
    return entity, field
