"""Heuristic plan generation for simple document shapes."""

from __future__ import annotations

import logging
from typing import Dict, List

from .document import ArrayNode, Node, ObjectNode, escape_token
from .plan import Directive, Field, Plan, new_plan

logger = logging.getLogger(__name__)

ROOT_PATH = "."


class PlanGenerationError(ValueError):
    """Raised when a document is too deep or too mixed to infer a plan."""


def generate_plan(root: Node) -> Plan:
    """Infer a one-directive plan.

    Supported shapes are a flat object (``named_bullets``), an array of
    scalars (``bullet_list``) and a non-empty array of flat objects
    (``table``, columns in first-appearance order across rows). Anything
    deeper fails; rows missing a column fail later, at render time.
    """

    if isinstance(root, ObjectNode):
        directive = _named_bullets_for(root)
    elif isinstance(root, ArrayNode):
        directive = _directive_for_array(root)
    else:
        raise PlanGenerationError(
            "automatic plan generation only supports root objects and arrays"
        )
    logger.debug("generated %s directive with %d fields", directive.op, len(directive.fields))
    return new_plan([directive])


def _named_bullets_for(root: ObjectNode) -> Directive:
    fields: List[Field] = []
    for member in root.fields:
        if not member.value.is_scalar():
            raise PlanGenerationError(
                "automatic plan generation only supports flat objects with scalar fields"
            )
        fields.append(_field_for(member.name))
    return Directive(op="named_bullets", path=ROOT_PATH, fields=tuple(fields))


def _directive_for_array(root: ArrayNode) -> Directive:
    if all(item.is_scalar() for item in root.items):
        return Directive(op="bullet_list", path=ROOT_PATH)

    rows = [item for item in root.items if isinstance(item, ObjectNode) and _is_flat(item)]
    if rows and len(rows) == len(root.items):
        seen: Dict[str, None] = {}
        for row in rows:
            for member in row.fields:
                seen.setdefault(member.name, None)
        fields = tuple(_field_for(name) for name in seen)
        return Directive(op="table", path=ROOT_PATH, fields=fields)

    raise PlanGenerationError(
        "automatic plan generation only supports arrays of scalar values "
        "or arrays of flat objects"
    )


def _is_flat(node: ObjectNode) -> bool:
    return all(member.value.is_scalar() for member in node.fields)


def _field_for(name: str) -> Field:
    # Keys containing "/" or "~" must survive relative path splitting.
    return Field(path=escape_token(name), label=name)
