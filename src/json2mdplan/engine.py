"""Coverage-checked plan evaluation.

Directives run in plan order and the first failure aborts the run. After
the loop every scalar leaf of the document must have been consumed by some
directive, otherwise the plan does not fully explain the document and the
evaluation fails with ``missing_coverage``.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import FrozenSet, List, Set, Tuple

from . import diagnostics, directives
from .constants import (
    CODE_MISSING_COVERAGE,
    CODE_UNSUPPORTED_VERSION,
    EVALUATOR_DIRECTIVE_INDEX,
    PLAN_VERSION,
)
from .document import Node
from .plan import Plan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evaluation:
    lines: Tuple[str, ...]
    consumed: FrozenSet[str]


def validate(root: Node, plan: Plan) -> None:
    """Raise :class:`DiagnosticError` unless ``plan`` fully explains ``root``."""

    evaluate(root, plan)


def render(root: Node, plan: Plan) -> str:
    return "\n".join(evaluate(root, plan).lines)


def evaluate(root: Node, plan: Plan) -> Evaluation:
    if plan.version != PLAN_VERSION:
        raise diagnostics.new(
            CODE_UNSUPPORTED_VERSION,
            EVALUATOR_DIRECTIVE_INDEX,
            "",
            f"plan version {plan.version} is not supported",
        )

    lines: List[str] = []
    consumed: Set[str] = set()
    for index, directive in enumerate(plan.directives):
        result = directives.execute(root, index, directive)
        lines.extend(result.lines)
        consumed.update(result.consumed)

    leaves = root.leaf_paths()
    # Duplicate keys share a pointer; only the last occurrence is reachable.
    remaining = Counter(leaves)
    for path in leaves:
        remaining[path] -= 1
        if path not in consumed or remaining[path]:
            raise diagnostics.new(
                CODE_MISSING_COVERAGE,
                EVALUATOR_DIRECTIVE_INDEX,
                path,
                f'plan does not cover JSON path "{path}"',
            )
    logger.debug(
        "coverage complete: %d leaves, %d consumed paths, %d lines",
        len(leaves),
        len(consumed),
        len(lines),
    )
    return Evaluation(lines=tuple(lines), consumed=frozenset(consumed))
