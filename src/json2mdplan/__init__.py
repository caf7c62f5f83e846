"""Render JSON documents as Markdown under a declarative, coverage-checked plan."""

from __future__ import annotations

from . import engine
from .constants import PLAN_VERSION
from .diagnostics import DiagnosticError, format_diagnostic
from .document import DocumentParseError, Node, parse_document
from .generate import PlanGenerationError, generate_plan
from .plan import Directive, Field, Plan, PlanParseError, marshal_plan, parse_plan
from .pointer import ResolutionError, resolve

__version__ = "0.1.0"


def validate_plan(document: Node, plan: Plan) -> None:
    """Raise :class:`DiagnosticError` unless ``plan`` renders and covers ``document``."""

    engine.validate(document, plan)


def render_markdown(document: Node, plan: Plan) -> str:
    return engine.render(document, plan)


__all__ = [
    "PLAN_VERSION",
    "Directive",
    "DiagnosticError",
    "DocumentParseError",
    "Field",
    "Node",
    "Plan",
    "PlanGenerationError",
    "PlanParseError",
    "ResolutionError",
    "format_diagnostic",
    "generate_plan",
    "marshal_plan",
    "parse_document",
    "parse_plan",
    "render_markdown",
    "resolve",
    "validate_plan",
]
