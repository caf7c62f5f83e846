"""Directive handler base class and shared resolution helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .. import diagnostics
from ..constants import (
    CODE_INVALID_PATH,
    CODE_INVALID_PLAN,
    CODE_MISSING_FIELD,
    CODE_NON_SCALAR_FIELD,
    CODE_TYPE_MISMATCH,
)
from ..document import KIND_ARRAY, Node
from ..plan import Directive, Field
from ..pointer import ResolutionError, pointer_tokens, resolve


@dataclass(frozen=True)
class DirectiveResult:
    lines: Tuple[str, ...] = ()
    consumed: Tuple[str, ...] = ()


class DirectiveHandler:
    """Executes one directive kind.

    ``target_kind`` is the node kind the directive path must resolve to, and
    ``fields_required`` says whether the field list must be non-empty (True)
    or absent (False).
    """

    op = "UNSET"
    target_kind = KIND_ARRAY
    fields_required = False

    @classmethod
    def execute(cls, root: Node, directive_index: int, directive: Directive) -> DirectiveResult:
        raise NotImplementedError

    @classmethod
    def check_field_shape(cls, directive_index: int, directive: Directive) -> None:
        if cls.fields_required and not directive.fields:
            raise invalid_plan(directive_index, directive, "fields must not be empty")
        if not cls.fields_required and directive.fields:
            raise invalid_plan(directive_index, directive, "fields are not supported")

    @classmethod
    def require_target(cls, root: Node, directive_index: int, directive: Directive) -> Tuple[Node, str]:
        """Resolve the directive path from the root and check its kind."""

        expr = directive.path
        try:
            node, pointer = resolve(root, root, (), expr)
        except ResolutionError as exc:
            raise diagnostics.new(
                CODE_INVALID_PATH,
                directive_index,
                expr,
                f'path "{expr}" could not be resolved: {exc}',
            ) from exc
        if node.kind != cls.target_kind:
            raise diagnostics.new(
                CODE_TYPE_MISMATCH,
                directive_index,
                expr,
                f'directive "{directive.op}" requires path "{display_path(expr)}" '
                f"to resolve to {cls.target_kind}",
            )
        return node, pointer


def resolve_field(
    root: Node,
    directive_index: int,
    directive: Directive,
    scope: Node,
    scope_tokens: Sequence[str],
    field: Field,
) -> Tuple[str, str]:
    """Return ``(formatted_value, absolute_pointer)`` for a projected field."""

    if field.path in ("", "."):
        raise invalid_plan(directive_index, directive, "field paths must not be empty")
    try:
        node, pointer = resolve(root, scope, scope_tokens, field.path)
    except ResolutionError as exc:
        raise diagnostics.new(
            CODE_MISSING_FIELD,
            directive_index,
            field.path,
            f'field path "{field.path}" does not exist relative to "."',
        ) from exc
    if not node.is_scalar():
        raise diagnostics.new(
            CODE_NON_SCALAR_FIELD,
            directive_index,
            field.path,
            f'field path "{field.path}" must resolve to a scalar value',
        )
    return node.format_scalar(), pointer


def child_tokens(pointer: str, *extra: str) -> List[str]:
    return pointer_tokens(pointer) + list(extra)


def invalid_plan(directive_index: int, directive: Directive, problem: str) -> diagnostics.DiagnosticError:
    return diagnostics.new(
        CODE_INVALID_PLAN,
        directive_index,
        directive.path,
        f'directive "{directive.op}" is invalid: {problem}',
    )


def display_path(path: str) -> str:
    return path or "."
