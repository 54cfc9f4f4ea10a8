"""
Scalar kind registry - fixed capability tables per primitive kind.

Pure lookups, no state. Operator tuples are alphabetical so every build
renders the same field order.

Usage:
    from graphforge.core.scalars import ScalarKind, capabilities_for

    caps = capabilities_for(ScalarKind.INT)
    caps.filters       # ('eq', 'gt', 'gte', 'in', 'lt', 'lte')
    caps.mutations     # ('add', 'set', 'subtract')
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .errors import CapabilityError, UnknownScalarKindError


class ScalarKind(str, Enum):
    """Primitive value categories with built-in capability tables."""
    ID = "ID"
    STRING = "String"
    INT = "Int"
    FLOAT = "Float"
    BIG_INT = "BigInt"
    BOOLEAN = "Boolean"
    DATE = "Date"
    TIME = "Time"
    LOCAL_TIME = "LocalTime"
    DATE_TIME = "DateTime"
    LOCAL_DATE_TIME = "LocalDateTime"
    DURATION = "Duration"


# Scalars that GraphQL itself defines; everything else needs a declaration
BUILTIN_GRAPHQL_SCALARS = frozenset({"ID", "String", "Int", "Float", "Boolean"})

SCALAR_DESCRIPTIONS = {
    ScalarKind.BIG_INT: (
        "A BigInt value up to 64 bits in size, which can be a number or a string if used inline, "
        "or a string only if used as a variable. Always returned as a string."
    ),
    ScalarKind.DATE: "A date, represented as a 'yyyy-mm-dd' string",
    ScalarKind.DATE_TIME: "A date and time, represented as an ISO-8601 string",
    ScalarKind.DURATION: "A duration, represented as an ISO 8601 duration string",
    ScalarKind.LOCAL_DATE_TIME: "A local datetime, represented as 'YYYY-MM-DDTHH:MM:SS'",
    ScalarKind.LOCAL_TIME: "A local time, represented as a time string without timezone information",
    ScalarKind.TIME: "A time, represented as an RFC3339 time string",
}

_COMPARABLE = ("eq", "gt", "gte", "in", "lt", "lte")
_TEXTUAL = ("contains", "endsWith", "eq", "in", "startsWith")

_FILTERS: dict[ScalarKind, tuple[str, ...]] = {
    ScalarKind.ID: _TEXTUAL,
    ScalarKind.STRING: _TEXTUAL,
    ScalarKind.INT: _COMPARABLE,
    ScalarKind.FLOAT: _COMPARABLE,
    ScalarKind.BIG_INT: _COMPARABLE,
    ScalarKind.BOOLEAN: ("eq",),
    ScalarKind.DATE: _COMPARABLE,
    ScalarKind.TIME: _COMPARABLE,
    ScalarKind.LOCAL_TIME: _COMPARABLE,
    ScalarKind.DATE_TIME: _COMPARABLE,
    ScalarKind.LOCAL_DATE_TIME: _COMPARABLE,
    ScalarKind.DURATION: _COMPARABLE,
}

# Operators a build may switch on through BuildOptions.extra_filters
_OPTIONAL_FILTERS: dict[ScalarKind, frozenset[str]] = {
    ScalarKind.ID: frozenset({"gt", "gte", "lt", "lte", "matches"}),
    ScalarKind.STRING: frozenset({"gt", "gte", "lt", "lte", "matches"}),
}

_MUTATIONS: dict[ScalarKind, tuple[str, ...]] = {
    ScalarKind.INT: ("add", "set", "subtract"),
    ScalarKind.BIG_INT: ("add", "set", "subtract"),
    ScalarKind.FLOAT: ("add", "divide", "multiply", "set", "subtract"),
}

_AGGREGATE_SELECTION: dict[ScalarKind, tuple[str, ...]] = {
    ScalarKind.STRING: ("longest", "shortest"),
    ScalarKind.INT: ("average", "max", "min", "sum"),
    ScalarKind.FLOAT: ("average", "max", "min", "sum"),
    ScalarKind.BIG_INT: ("average", "max", "min", "sum"),
    ScalarKind.TIME: ("max", "min"),
    ScalarKind.LOCAL_TIME: ("max", "min"),
    ScalarKind.DATE_TIME: ("max", "min"),
    ScalarKind.LOCAL_DATE_TIME: ("max", "min"),
    ScalarKind.DURATION: ("max", "min"),
}

_AGGREGATION_FILTERS: dict[ScalarKind, tuple[str, ...]] = {
    ScalarKind.STRING: ("averageLength", "longestLength", "shortestLength"),
    ScalarKind.INT: ("average", "max", "min", "sum"),
    ScalarKind.FLOAT: ("average", "max", "min", "sum"),
    ScalarKind.BIG_INT: ("average", "max", "min", "sum"),
    ScalarKind.TIME: ("max", "min"),
    ScalarKind.LOCAL_TIME: ("max", "min"),
    ScalarKind.DATE_TIME: ("max", "min"),
    ScalarKind.LOCAL_DATE_TIME: ("max", "min"),
    ScalarKind.DURATION: ("average", "max", "min"),
}

_AGGREGATION_FILTER_DESCRIPTIONS = {
    ScalarKind.STRING: "Filters for an aggregation of a string field",
    ScalarKind.INT: "Filters for an aggregation of an int field",
    ScalarKind.FLOAT: "Filters for an aggregation of a float field",
    ScalarKind.BIG_INT: "Filters for an aggregation of an BigInt field",
    ScalarKind.TIME: "Filters for an aggregation of an Time input field",
    ScalarKind.LOCAL_TIME: "Filters for an aggregation of an LocalTime input field",
    ScalarKind.DATE_TIME: "Filters for an aggregation of an DateTime input field",
    ScalarKind.LOCAL_DATE_TIME: "Filters for an aggregation of an LocalDateTime input field",
    ScalarKind.DURATION: "Filters for an aggregation of a Dutation input field",
}

LIST_FILTERS = ("eq", "includes")
LIST_MUTATIONS = ("pop", "push", "set")
OPAQUE_FILTERS = ("eq", "in")
OPAQUE_MUTATIONS = ("set",)

# Comparators used by the legacy flat aggregation filters
AGGREGATION_COMPARATORS = ("EQUAL", "GT", "GTE", "LT", "LTE")


@dataclass(frozen=True)
class Capabilities:
    """Operator set for one (kind, list-ness) combination."""
    kind: str
    is_list: bool = False
    is_enum: bool = False
    is_builtin: bool = True
    filters: tuple[str, ...] = ()
    mutations: tuple[str, ...] = ()
    aggregations: tuple[str, ...] = ()
    aggregation_filters: tuple[str, ...] = ()

    @property
    def sortable(self) -> bool:
        return not self.is_list

    @property
    def aggregable(self) -> bool:
        return bool(self.aggregations)

    @property
    def scalar_kind(self) -> ScalarKind | None:
        return ScalarKind(self.kind) if self.is_builtin else None

    def filter_type(self, op: str) -> str:
        """GraphQL type of a generic filter operator."""
        if op == "in" or (self.is_list and op == "eq"):
            return f"[{self.kind}!]"
        return self.kind

    def mutation_type(self, op: str) -> str:
        """GraphQL type of a generic mutation operator."""
        if op == "pop":
            return "Int" if self.is_builtin else self.kind
        if op == "push" or (self.is_list and op == "set"):
            return f"[{self.kind}!]"
        return self.kind


def resolve_kind(kind: ScalarKind | str) -> ScalarKind:
    """Look up a kind by name, failing loudly instead of falling back."""
    if isinstance(kind, ScalarKind):
        return kind
    try:
        return ScalarKind(kind)
    except ValueError:
        raise UnknownScalarKindError(str(kind)) from None


def is_scalar_kind(name: str) -> bool:
    return name in ScalarKind._value2member_map_


def capabilities_for(
    kind: ScalarKind | str,
    is_list: bool = False,
    extra_filters: Iterable[str] = (),
) -> Capabilities:
    """
    Return the capability set for a built-in kind.

    Args:
        kind: Scalar kind or its GraphQL name
        is_list: Whether the field is a list of the kind
        extra_filters: Optional operators switched on for this build

    Raises:
        UnknownScalarKindError: kind is not registered
        CapabilityError: an extra operator is not supported by the kind
    """
    kind = resolve_kind(kind)
    extras = set(extra_filters)
    unsupported = extras - _OPTIONAL_FILTERS.get(kind, frozenset())
    if unsupported:
        raise CapabilityError(kind.value, sorted(unsupported)[0])

    if is_list:
        return Capabilities(
            kind=kind.value,
            is_list=True,
            filters=LIST_FILTERS,
            mutations=LIST_MUTATIONS,
        )

    return Capabilities(
        kind=kind.value,
        filters=tuple(sorted(set(_FILTERS[kind]) | extras)),
        mutations=_MUTATIONS.get(kind, ("set",)),
        aggregations=_AGGREGATE_SELECTION.get(kind, ()),
        aggregation_filters=_AGGREGATION_FILTERS.get(kind, ()),
    )


def opaque_capabilities(type_name: str, is_list: bool = False, is_enum: bool = False) -> Capabilities:
    """Capabilities for user enums and user scalars: equality and set only."""
    return Capabilities(
        kind=type_name,
        is_list=is_list,
        is_enum=is_enum,
        is_builtin=False,
        filters=LIST_FILTERS if is_list else OPAQUE_FILTERS,
        mutations=LIST_MUTATIONS if is_list else OPAQUE_MUTATIONS,
    )


def supported_extra_filters(kind: ScalarKind | str) -> frozenset[str]:
    return _OPTIONAL_FILTERS.get(resolve_kind(kind), frozenset())


def all_filter_operators() -> frozenset[str]:
    """Every filter operator some field could carry, optional ones included."""
    operators = set(LIST_FILTERS) | set(OPAQUE_FILTERS)
    for table in (_FILTERS, _OPTIONAL_FILTERS):
        for ops in table.values():
            operators.update(ops)
    return frozenset(operators)


def all_mutation_operators() -> frozenset[str]:
    operators = set(LIST_MUTATIONS) | set(OPAQUE_MUTATIONS)
    for ops in _MUTATIONS.values():
        operators.update(ops)
    return frozenset(operators)


def all_aggregation_filters() -> frozenset[str]:
    return frozenset(op for ops in _AGGREGATION_FILTERS.values() for op in ops)


# =============================================================================
# Aggregation value types
# =============================================================================


def aggregate_selection_type(kind: ScalarKind, op: str) -> str:
    """Value type of a field on {Kind}AggregateSelection."""
    if kind == ScalarKind.INT and op == "average":
        return ScalarKind.FLOAT.value
    return kind.value


def aggregation_filter_kind(kind: ScalarKind, op: str) -> ScalarKind:
    """Kind whose ScalarFilters type a {Kind}ScalarAggregationFilters field uses."""
    if kind == ScalarKind.STRING:
        return ScalarKind.FLOAT if op == "averageLength" else ScalarKind.INT
    if kind == ScalarKind.INT and op == "average":
        return ScalarKind.FLOAT
    return kind


def aggregation_filter_description(kind: ScalarKind) -> str:
    return _AGGREGATION_FILTER_DESCRIPTIONS[kind]


def filters_description(caps: Capabilities) -> str:
    if caps.is_list and caps.is_builtin:
        return f"{caps.kind} list filters"
    return f"{caps.kind} filters"


def mutations_description(caps: Capabilities) -> str:
    if caps.is_list:
        return f"Mutations for a list for {caps.kind}"
    # user scalars share the filters wording
    if not caps.is_builtin and not caps.is_enum:
        return f"{caps.kind} filters"
    return f"{caps.kind} mutations"
