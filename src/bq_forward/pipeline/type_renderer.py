from dataclasses import replace
from typing import List, Optional

from bq_forward.canonical.descriptor import (
    ArrayType,
    Mode,
    StructType,
    TypeDescriptor,
    TypeParameters,
)
from bq_forward.pipeline.column_builder import NOT_NULL, ColumnDefinition
from bq_forward.utils.formatting import escape_string, indent_block


def render_parameters(parameters: Optional[TypeParameters]) -> str:
    """
    Render "(precision, scale, length)" from whichever parameters are set.
    Order is fixed and independent of the type.
    """
    if not parameters:
        return ""

    params: List[str] = []
    for value in (parameters.precision, parameters.scale, parameters.length):
        if value:
            params.append(str(value))

    if not params:
        return ""
    return f"({', '.join(params)})"


def render_description(description: Optional[str]) -> str:
    if not description:
        return ""
    return f' OPTIONS( description="{escape_string(description)}" )'


def desugar_repeated(descriptor: TypeDescriptor) -> TypeDescriptor:
    """
    REPEATED scalar / struct -> ARRAY with a single item.

    The item loses its mode and description; the description stays
    on the column itself.
    """
    if descriptor.mode != Mode.REPEATED or isinstance(descriptor, ArrayType):
        return descriptor

    # Unlike explicit ARRAY items, the item drops its description:
    # it is rendered once, on the column, not again inside ARRAY<>.
    item = replace(descriptor, mode=Mode.NULLABLE, description=None)
    return ArrayType(
        items=[item],
        mode=Mode.REPEATED,
        description=descriptor.description,
    )


def render_type(descriptor: TypeDescriptor) -> str:
    """
    Render the type part of a column declaration.

    - SCALAR            -> NAME(params)
    - ARRAY<items>      -> items rendered as unnamed array items
    - STRUCT<fields>    -> fields rendered as named columns
    """
    if isinstance(descriptor, ArrayType):
        items = ",\n".join(
            render_column(item, is_array_item=True)
            for item in descriptor.items
        )
        if not items:
            return "ARRAY<>"
        return f"ARRAY<\n{indent_block(items)}\n>"

    if isinstance(descriptor, StructType):
        fields = ",\n".join(
            render_column(field_type, name=field_name)
            for field_name, field_type in descriptor.fields.items()
        )
        if not fields:
            return "STRUCT<>"
        return f"STRUCT<\n{indent_block(fields)}\n>"

    return (descriptor.name or "").upper() + render_parameters(descriptor.parameters)


def build_column_definition(
    descriptor: TypeDescriptor,
    name: Optional[str] = None,
    is_array_item: bool = False,
) -> ColumnDefinition:
    descriptor = desugar_repeated(descriptor)

    # Array elements have no null / not-null concept of their own
    not_null = ""
    if descriptor.mode == Mode.REQUIRED and not is_array_item:
        not_null = NOT_NULL

    return ColumnDefinition(
        name=None if is_array_item else name,
        rendered_type=render_type(descriptor),
        not_null=not_null,
        options=render_description(descriptor.description),
    )


def render_column(
    descriptor: TypeDescriptor,
    name: Optional[str] = None,
    is_array_item: bool = False,
) -> str:
    return build_column_definition(descriptor, name, is_array_item).text
