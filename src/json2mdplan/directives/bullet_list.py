"""Bullet list over an array of scalars."""

from __future__ import annotations

from typing import List, cast

from .. import diagnostics
from ..constants import CODE_NON_SCALAR_ITEM
from ..document import KIND_ARRAY, ArrayNode, Node
from ..plan import Directive
from ..renderer import format_bullet
from . import register
from .base import DirectiveHandler, DirectiveResult, display_path


@register
class BulletListHandler(DirectiveHandler):
    """Render each scalar item of an array as a "- value" bullet."""

    op = "bullet_list"
    target_kind = KIND_ARRAY
    fields_required = False

    @classmethod
    def execute(cls, root: Node, directive_index: int, directive: Directive) -> DirectiveResult:
        cls.check_field_shape(directive_index, directive)
        target, pointer = cls.require_target(root, directive_index, directive)
        items = cast(ArrayNode, target).items

        lines: List[str] = []
        consumed: List[str] = []
        for index, item in enumerate(items):
            if not item.is_scalar():
                raise diagnostics.new(
                    CODE_NON_SCALAR_ITEM,
                    directive_index,
                    directive.path,
                    f'directive "{directive.op}" requires all array items at path '
                    f'"{display_path(directive.path)}" to be scalar values',
                )
            lines.append(format_bullet(item.format_scalar()))
            consumed.append(f"{pointer}/{index}")
        return DirectiveResult(lines=tuple(lines), consumed=tuple(consumed))
