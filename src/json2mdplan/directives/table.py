"""Markdown table over an array of objects."""

from __future__ import annotations

from typing import List, cast

from ..document import KIND_ARRAY, ArrayNode, Node, ObjectNode
from ..plan import Directive
from ..renderer import format_table_header, format_table_row
from . import register
from .base import (
    DirectiveHandler,
    DirectiveResult,
    child_tokens,
    invalid_plan,
    resolve_field,
)


@register
class TableHandler(DirectiveHandler):
    """Render an array of objects as a table with one column per field.

    Columns are fixed by the field list. A field missing from any row fails
    the directive; cells are never left blank.
    """

    op = "table"
    target_kind = KIND_ARRAY
    fields_required = True

    @classmethod
    def execute(cls, root: Node, directive_index: int, directive: Directive) -> DirectiveResult:
        cls.check_field_shape(directive_index, directive)
        target, pointer = cls.require_target(root, directive_index, directive)
        items = cast(ArrayNode, target).items

        lines: List[str] = format_table_header([field.label for field in directive.fields])
        consumed: List[str] = []
        for row_index, row in enumerate(items):
            if not isinstance(row, ObjectNode):
                raise invalid_plan(directive_index, directive, "all array items must be objects")
            row_tokens = child_tokens(pointer, str(row_index))
            cells: List[str] = []
            for field in directive.fields:
                value, cell_pointer = resolve_field(
                    root, directive_index, directive, row, row_tokens, field
                )
                cells.append(value)
                consumed.append(cell_pointer)
            lines.append(format_table_row(cells))
        return DirectiveResult(lines=tuple(lines), consumed=tuple(consumed))
