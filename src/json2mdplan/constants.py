"""Shared constants for json2mdplan."""

from __future__ import annotations

PROJECT_NAME = "json2mdplan"
PLAN_VERSION = 1

CODE_UNKNOWN_DIRECTIVE = "unknown_directive"
CODE_INVALID_PLAN = "invalid_plan"
CODE_INVALID_PATH = "invalid_path"
CODE_TYPE_MISMATCH = "type_mismatch"
CODE_MISSING_FIELD = "missing_field"
CODE_NON_SCALAR_FIELD = "non_scalar_field"
CODE_NON_SCALAR_ITEM = "non_scalar_item"
CODE_MISSING_COVERAGE = "missing_coverage"
CODE_UNSUPPORTED_VERSION = "unsupported_version"
CODE_GENERIC_ERROR = "error"

EVALUATOR_DIRECTIVE_INDEX = -1

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 2
EXIT_INPUT_ERROR = 3
EXIT_VALIDATION_ERROR = 4
# Reserved for the LLM plan-drafting integration, which this package does not ship.
EXIT_API_ERROR = 5

__all__ = [
    "PROJECT_NAME",
    "PLAN_VERSION",
    "CODE_UNKNOWN_DIRECTIVE",
    "CODE_INVALID_PLAN",
    "CODE_INVALID_PATH",
    "CODE_TYPE_MISMATCH",
    "CODE_MISSING_FIELD",
    "CODE_NON_SCALAR_FIELD",
    "CODE_NON_SCALAR_ITEM",
    "CODE_MISSING_COVERAGE",
    "CODE_UNSUPPORTED_VERSION",
    "CODE_GENERIC_ERROR",
    "EVALUATOR_DIRECTIVE_INDEX",
    "EXIT_SUCCESS",
    "EXIT_USAGE_ERROR",
    "EXIT_INPUT_ERROR",
    "EXIT_VALIDATION_ERROR",
    "EXIT_API_ERROR",
]
