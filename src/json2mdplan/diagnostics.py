"""Structured diagnostics raised by plan evaluation."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .constants import CODE_GENERIC_ERROR, EVALUATOR_DIRECTIVE_INDEX


class DiagnosticError(Exception):
    """Evaluation failure pinned to a directive and a path.

    ``code`` is the machine-checkable identifier; ``message`` is for humans
    and carries no stability guarantee.
    """

    def __init__(self, code: str, directive: int, path: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.directive = directive
        self.path = path
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "directive": self.directive,
            "path": self.path,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return (
            f"DiagnosticError(code={self.code!r}, directive={self.directive}, "
            f"path={self.path!r}, message={self.message!r})"
        )


def new(code: str, directive: int, path: str, message: str) -> DiagnosticError:
    return DiagnosticError(code=code, directive=directive, path=path, message=message)


def format_diagnostic(error: Optional[BaseException]) -> str:
    """Return the four-line ``key=value`` block shown to operators."""

    if error is None:
        return ""
    if isinstance(error, DiagnosticError):
        return (
            f"code={error.code}\n"
            f"directive={error.directive}\n"
            f"path={error.path}\n"
            f"message={error.message}"
        )
    return (
        f"code={CODE_GENERIC_ERROR}\n"
        f"directive={EVALUATOR_DIRECTIVE_INDEX}\n"
        f"path=\n"
        f"message={error}"
    )
