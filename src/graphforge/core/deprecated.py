"""
Deprecated-field compiler - legacy flat fields kept for older clients.

Stateless. Every mirror is derived from the canonical operator tuples of the
field's Capabilities, so a legacy field exists exactly when its generic
counterpart does. Each category can be switched off through BuildOptions.
"""

from __future__ import annotations

from . import naming
from .defs import TypeRef
from .options import BuildOptions, DeprecatedCategory
from .scalars import (
    AGGREGATION_COMPARATORS,
    Capabilities,
    ScalarKind,
    aggregation_filter_kind,
    all_aggregation_filters,
    all_filter_operators,
    all_mutation_operators,
)
from .schema_types import GeneratedType
from .utils import pluralize, to_constant_case


QUANTIFIERS = ("all", "none", "single", "some")

# Generic mutation operator to (legacy suffix, operator word in the reason)
_INTEGER_MATH = {"add": ("INCREMENT", "increment"), "subtract": ("DECREMENT", "decrement")}
_FLOAT_MATH = {op: (op.upper(), op) for op in ("add", "divide", "multiply", "subtract")}


# =============================================================================
# Reason templates
# =============================================================================


def attribute_filter_reason(field: str, op: str) -> str:
    return f"Please use the relevant generic filter {field}: {{ {op}: ... }}"


def set_mutation_reason(field: str, op: str = "set") -> str:
    return f"Please use the generic mutation '{field}: {{ {op}: ... }} }}' instead."


def math_mutation_reason(field: str, op: str) -> str:
    return f"Please use the relevant generic mutation '{field}: {{ {op}: ... }} }}' instead."


def relationship_filter_reason(field: str, quantifier: str) -> str:
    # single and some carry an extra space
    padding = "  " if quantifier in ("single", "some") else " "
    return f"Please use the relevant generic filter '{field}: {{{padding}{quantifier}: ... }}' instead."


def connection_filter_reason(field: str, quantifier: str) -> str:
    return (
        f"Please use the relevant generic filter "
        f"'{naming.connection_field(field)}: {{ {quantifier}: {{ node: ... }} }} }}' instead."
    )


def aggregation_filter_reason(field: str, aggregation: str, comparator: str) -> str:
    op = _comparator_word(comparator)
    return f"Please use the relevant generic filter '{field}: {{ {aggregation}: {{ {op}: ... }} }} }}' instead."


def aggregate_count_reason(comparator: str) -> str:
    op = _comparator_word(comparator)
    return f"Please use the relevant generic filter '{{ count: {{ {op}: ... }} }} }}' instead."


def aggregate_outside_connection_reason(field: str) -> str:
    connection = naming.connection_field(field)
    return (
        f"Aggregate filters are moved inside the {connection} filter, "
        f"please use {{ {connection}: {{ aggregate: {{...}} }} }} instead"
    )


def _comparator_word(comparator: str) -> str:
    word = comparator.lower()
    return "eq" if word == "equal" else word


# =============================================================================
# Reserved names
# =============================================================================


def attribute_suffixes() -> frozenset[str]:
    """Every suffix a legacy mirror may put after `{field}_` for an attribute field."""
    suffixes = {to_constant_case(op) for op in all_filter_operators()}
    for op in all_mutation_operators():
        if op not in _INTEGER_MATH and op not in _FLOAT_MATH:
            suffixes.add(op.upper())
    for math in (_INTEGER_MATH, _FLOAT_MATH):
        suffixes.update(suffix for suffix, _ in math.values())
    suffixes.update(
        f"{to_constant_case(aggregation)}_{comparator}"
        for aggregation in all_aggregation_filters()
        for comparator in AGGREGATION_COMPARATORS
    )
    return frozenset(suffixes)


def generated_names(field: str, is_relationship: bool) -> frozenset[str]:
    """
    Field names the build derives from one declared field.

    For a relationship `actors`: actorsConnection, actorsAggregate,
    actors_SOME, actorsConnection_SOME, ...
    For an attribute `title`: title_EQ, title_SET, title_AVERAGE_LENGTH_GT, ...
    """
    if not is_relationship:
        return frozenset(naming.deprecated_field(field, suffix) for suffix in attribute_suffixes())

    connection = naming.connection_field(field)
    names = {connection, naming.aggregate_filter_field(field)}
    for quantifier in QUANTIFIERS:
        names.add(naming.deprecated_field(field, quantifier.upper()))
        names.add(naming.deprecated_field(connection, quantifier.upper()))
    return frozenset(names)


# =============================================================================
# Mirrors
# =============================================================================


def add_attribute_filters(
    target: GeneratedType,
    field: str,
    ref: TypeRef,
    caps: Capabilities,
    options: BuildOptions,
):
    """{field}_EQ, _IN, _CONTAINS, ... on a Where input."""
    if not options.include_deprecated(DeprecatedCategory.ATTRIBUTE_FILTERS):
        return

    for op in caps.filters:
        # booleans only ever had an equality mirror
        if caps.kind == ScalarKind.BOOLEAN.value and op != "eq":
            continue
        target.add_field(
            naming.deprecated_field(field, to_constant_case(op)),
            _attribute_filter_type(ref, caps, op),
            deprecation=attribute_filter_reason(field, op),
        )


def _attribute_filter_type(ref: TypeRef, caps: Capabilities, op: str) -> str:
    if op == "eq":
        return ref.render_nullable()
    if op == "in":
        return f"[{ref.base}]" if ref.nullable else f"[{ref.base}!]"
    if op == "matches":
        return ScalarKind.STRING.value
    return ref.base


def add_mutation_operations(
    target: GeneratedType,
    field: str,
    ref: TypeRef,
    caps: Capabilities,
    options: BuildOptions,
):
    """{field}_SET, _PUSH, _POP, _INCREMENT, ... on an UpdateInput."""
    if not options.include_deprecated(DeprecatedCategory.MUTATION_OPERATIONS):
        return

    if caps.kind in (ScalarKind.INT.value, ScalarKind.BIG_INT.value):
        math = _INTEGER_MATH
    elif caps.kind == ScalarKind.FLOAT.value:
        math = _FLOAT_MATH
    else:
        math = {}

    for op in caps.mutations:
        if caps.is_list or op == "set":
            target.add_field(
                naming.deprecated_field(field, op.upper()),
                ref.render_nullable() if op == "set" else caps.mutation_type(op),
                deprecation=set_mutation_reason(field, op),
            )
        elif op in math:
            suffix, word = math[op]
            target.add_field(
                naming.deprecated_field(field, suffix),
                caps.kind,
                deprecation=math_mutation_reason(field, word),
            )


def add_relationship_filters(
    target: GeneratedType,
    owners: str,
    field: str,
    target_name: str,
    target_where: str,
    connection_type: str,
    connection_where: str,
    options: BuildOptions,
):
    """{field}_ALL/_NONE/_SINGLE/_SOME and {field}Connection_ALL/... on a Where input."""
    if not options.include_deprecated(DeprecatedCategory.RELATIONSHIP_FILTERS):
        return

    for quantifier in QUANTIFIERS:
        target.add_field(
            naming.deprecated_field(field, quantifier.upper()),
            target_where,
            description=quantifier_description(owners, quantifier, pluralize(target_name)),
            deprecation=relationship_filter_reason(field, quantifier),
        )
    for quantifier in QUANTIFIERS:
        target.add_field(
            naming.deprecated_field(naming.connection_field(field), quantifier.upper()),
            connection_where,
            description=quantifier_description(owners, quantifier, pluralize(connection_type)),
            deprecation=connection_filter_reason(field, quantifier),
        )


def quantifier_description(owners: str, quantifier: str, related: str) -> str:
    """Return Movies where some of the related Actors match this filter"""
    word = "one" if quantifier == "single" else quantifier
    return f"Return {owners} where {word} of the related {related} match this filter"


def add_aggregation_filters(
    target: GeneratedType,
    field: str,
    kind: ScalarKind,
    caps: Capabilities,
    options: BuildOptions,
):
    """{field}_AVERAGE_EQUAL, _SHORTEST_LENGTH_GT, ... on an aggregation where input."""
    if not options.include_deprecated(DeprecatedCategory.AGGREGATION_FILTERS):
        return

    for aggregation in caps.aggregation_filters:
        value_type = aggregation_filter_kind(kind, aggregation).value
        for comparator in AGGREGATION_COMPARATORS:
            target.add_field(
                naming.deprecated_field(field, f"{to_constant_case(aggregation)}_{comparator}"),
                value_type,
                deprecation=aggregation_filter_reason(field, aggregation, comparator),
            )


def add_aggregate_count_filters(target: GeneratedType, options: BuildOptions):
    """count_EQ, count_GT, ... on {Owner}{Field}AggregateInput."""
    if not options.include_deprecated(DeprecatedCategory.AGGREGATION_FILTERS):
        return

    for comparator in ("EQ", "GT", "GTE", "LT", "LTE"):
        target.add_field(
            naming.deprecated_field("count", comparator),
            ScalarKind.INT.value,
            deprecation=aggregate_count_reason(comparator),
        )


def add_aggregate_outside_connection(
    target: GeneratedType,
    field: str,
    aggregate_input: str,
    options: BuildOptions,
):
    """{field}Aggregate on a Where input."""
    if not options.include_deprecated(DeprecatedCategory.AGGREGATION_FILTERS_OUTSIDE_CONNECTION):
        return

    target.add_field(
        naming.aggregate_filter_field(field),
        aggregate_input,
        deprecation=aggregate_outside_connection_reason(field),
    )
