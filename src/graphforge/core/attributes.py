"""
Attribute fields - what scalar, enum and user-scalar fields contribute to the
per-type inputs and selections.

Shared by nodes, interfaces and relationship properties types.
"""

from __future__ import annotations

from typing import Iterable

from . import deprecated, naming
from .context import BuildContext
from .defs import FieldDef, TargetKind, TimestampOperation
from .schema_types import GeneratedType, render_literal


def add_logical_operators(target: GeneratedType):
    """AND / NOT / OR over the input itself."""
    for operator in naming.LOGICAL_OPERATORS:
        target.add_field(operator, target.name if operator == "NOT" else f"[{target.name}!]")


def add_object_fields(ctx: BuildContext, target: GeneratedType, fields: Iterable[FieldDef]):
    """Readable fields of an object or interface type, as declared."""
    for f in fields:
        ctx.scalars.capabilities(f.type_ref)
        if f.selectable.on_read:
            target.add_field(f.name, f.type, description=f.description)


def add_filter_fields(ctx: BuildContext, where: GeneratedType, fields: Iterable[FieldDef]):
    for f in ctx.index.filterable_fields(tuple(fields)):
        ref = f.type_ref
        caps = ctx.scalars.capabilities(ref)
        where.add_field(f.name, ctx.scalars.filters(caps))
        deprecated.add_attribute_filters(where, f.name, ref, caps, ctx.options)


def add_sort_fields(ctx: BuildContext, sort: GeneratedType, fields: Iterable[FieldDef]):
    direction = ctx.scalars.shared(naming.SORT_DIRECTION)
    for f in ctx.index.sortable_fields(tuple(fields)):
        sort.add_field(f.name, direction)


def add_create_fields(ctx: BuildContext, create: GeneratedType, fields: Iterable[FieldDef]):
    """Client-settable fields as declared, defaults carried into the input."""
    for f in fields:
        if not f.settable_on(TimestampOperation.CREATE):
            continue
        ctx.scalars.capabilities(f.type_ref)
        default = None
        if f.has_default:
            is_enum = ctx.graph.kind_of(f.type_ref.base) == TargetKind.ENUM
            default = render_literal(f.default, is_enum)
        create.add_field(f.name, f.type, default=default)


def add_mutation_fields(ctx: BuildContext, update: GeneratedType, fields: Iterable[FieldDef]):
    for f in fields:
        if not f.settable_on(TimestampOperation.UPDATE):
            continue
        ref = f.type_ref
        caps = ctx.scalars.capabilities(ref)
        update.add_field(f.name, ctx.scalars.mutations(caps))
        deprecated.add_mutation_operations(update, f.name, ref, caps, ctx.options)


def add_aggregate_selections(ctx: BuildContext, target: GeneratedType, fields: Iterable[FieldDef]):
    """{field}: {Kind}AggregateSelection! for every aggregable field."""
    for f, kind in ctx.index.aggregate_selection_fields(tuple(fields)):
        target.add_field(f.name, f"{ctx.scalars.aggregate_selection(kind)}!")


def add_aggregation_filters(ctx: BuildContext, target: GeneratedType, fields: Iterable[FieldDef]):
    """{field}: {Kind}ScalarAggregationFilters plus the flat legacy comparators."""
    for f, kind in ctx.index.aggregation_filter_fields(tuple(fields)):
        target.add_field(f.name, ctx.scalars.aggregation_filters(kind))
        deprecated.add_aggregation_filters(
            target,
            f.name,
            kind,
            ctx.scalars.capabilities(f.type_ref),
            ctx.options,
        )


def has_aggregate_selections(ctx: BuildContext, fields: Iterable[FieldDef]) -> bool:
    return bool(ctx.index.aggregate_selection_fields(tuple(fields)))


def has_aggregation_filters(ctx: BuildContext, fields: Iterable[FieldDef]) -> bool:
    return bool(ctx.index.aggregation_filter_fields(tuple(fields)))

