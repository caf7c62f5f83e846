"""Labeled bullets projected from an object."""

from __future__ import annotations

from typing import List

from ..document import KIND_OBJECT, Node
from ..plan import Directive
from ..renderer import format_named_bullet
from . import register
from .base import DirectiveHandler, DirectiveResult, child_tokens, resolve_field


@register
class NamedBulletsHandler(DirectiveHandler):
    """Render one "- **Label:** value" bullet per field, in field order."""

    op = "named_bullets"
    target_kind = KIND_OBJECT
    fields_required = True

    @classmethod
    def execute(cls, root: Node, directive_index: int, directive: Directive) -> DirectiveResult:
        cls.check_field_shape(directive_index, directive)
        target, pointer = cls.require_target(root, directive_index, directive)
        scope_tokens = child_tokens(pointer)

        lines: List[str] = []
        consumed: List[str] = []
        for field in directive.fields:
            value, field_pointer = resolve_field(
                root, directive_index, directive, target, scope_tokens, field
            )
            lines.append(format_named_bullet(field.label, value))
            consumed.append(field_pointer)
        return DirectiveResult(lines=tuple(lines), consumed=tuple(consumed))
