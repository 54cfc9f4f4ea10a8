"""
Build options - switches that shape a single build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from .errors import GraphConfigError
from .scalars import ScalarKind, supported_extra_filters


class DeprecatedCategory(str, Enum):
    """Groups of legacy flat fields that can be left out of a build."""
    ATTRIBUTE_FILTERS = "attribute_filters"
    MUTATION_OPERATIONS = "mutation_operations"
    RELATIONSHIP_FILTERS = "relationship_filters"
    AGGREGATION_FILTERS = "aggregation_filters"
    AGGREGATION_FILTERS_OUTSIDE_CONNECTION = "aggregation_filters_outside_connection"


@dataclass(frozen=True)
class BuildOptions:
    """Options for one build. Immutable so a build cannot change them midway."""
    exclude_deprecated: frozenset[DeprecatedCategory] = frozenset()
    extra_filters: tuple[tuple[ScalarKind, tuple[str, ...]], ...] = ()

    def include_deprecated(self, category: DeprecatedCategory) -> bool:
        return category not in self.exclude_deprecated

    def extra_filters_for(self, kind: ScalarKind) -> tuple[str, ...]:
        for extra_kind, ops in self.extra_filters:
            if extra_kind == kind:
                return ops
        return ()

    @classmethod
    def without_deprecated(cls) -> "BuildOptions":
        return cls(exclude_deprecated=frozenset(DeprecatedCategory))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "BuildOptions":
        """
        Create options from a config mapping.

        Example:
            {"exclude_deprecated": ["attribute_filters"],
             "filters": {"String": ["matches", "gt"]}}

        `exclude_deprecated: true` drops every category.
        """
        data = data or {}

        excluded = data.get("exclude_deprecated", [])
        if excluded is True:
            categories = frozenset(DeprecatedCategory)
        else:
            try:
                categories = frozenset(DeprecatedCategory(c) for c in excluded or [])
            except ValueError as e:
                raise GraphConfigError(f"Unknown deprecated category: {e}") from e

        extra: list[tuple[ScalarKind, tuple[str, ...]]] = []
        for kind_name, ops in sorted((data.get("filters") or {}).items()):
            try:
                kind = ScalarKind(kind_name)
            except ValueError as e:
                raise GraphConfigError(f"Unknown scalar kind in filters: '{kind_name}'") from e
            extra.append((kind, _normalize_ops(ops)))

        return cls(exclude_deprecated=categories, extra_filters=tuple(extra))

    def to_dict(self) -> dict[str, Any]:
        return {
            "exclude_deprecated": sorted(c.value for c in self.exclude_deprecated),
            "filters": {kind.value: list(ops) for kind, ops in self.extra_filters},
        }


def _normalize_ops(ops: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted({op.lower() for op in ops}))


def describe_extra_filters() -> dict[str, list[str]]:
    """Optional operators per kind, for help output."""
    return {
        kind.value: sorted(supported_extra_filters(kind))
        for kind in ScalarKind
        if supported_extra_filters(kind)
    }
