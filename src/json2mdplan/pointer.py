"""Path resolution against a parsed document.

Absolute expressions start with ``/`` and are navigated from the root.
Anything else is relative to the current node: ``""`` and ``"."`` mean the
current node itself, and empty or ``.`` segments are skipped. Every
successful resolution also yields the canonical absolute pointer of the
target, which is what coverage tracking records.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .document import (
    ArrayNode,
    Node,
    ObjectNode,
    encode_pointer,
    escape_token,
    unescape_token,
)

__all__ = [
    "ResolutionError",
    "encode_pointer",
    "escape_token",
    "unescape_token",
    "pointer_tokens",
    "relative_tokens",
    "resolve",
    "navigate",
]


class ResolutionError(LookupError):
    """Raised when an expression does not lead to a node."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


def pointer_tokens(pointer: str) -> List[str]:
    """Split an absolute pointer into raw tokens; ``""`` is the root."""

    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise ResolutionError("absolute JSON pointer must start with '/'")
    return [unescape_token(token) for token in pointer[1:].split("/")]


def relative_tokens(expr: str) -> List[str]:
    if expr in ("", "."):
        return []
    return [unescape_token(token) for token in expr.split("/") if token not in ("", ".")]


def resolve(
    root: Node,
    current: Node,
    current_tokens: Optional[Sequence[str]],
    expr: str,
) -> Tuple[Node, str]:
    """Return ``(node, absolute_pointer)`` for ``expr`` evaluated at ``current``."""

    base = tuple(current_tokens or ())
    if expr in ("", "."):
        return current, encode_pointer(base)
    if expr.startswith("/"):
        node, tokens = navigate(root, pointer_tokens(expr), ())
    else:
        node, tokens = navigate(current, relative_tokens(expr), base)
    return node, encode_pointer(tokens)


def navigate(
    node: Node,
    tokens: Sequence[str],
    base: Sequence[str],
) -> Tuple[Node, Tuple[str, ...]]:
    current = node
    absolute = list(base)
    for token in tokens:
        if isinstance(current, ObjectNode):
            child = current.find_field(token)
            if child is None:
                raise ResolutionError(f'field "{token}" does not exist')
            current = child
        elif isinstance(current, ArrayNode):
            index = _array_index(token, len(current.items))
            current = current.items[index]
            # Leaf paths spell indices without leading zeros.
            token = str(index)
        else:
            raise ResolutionError(f'cannot descend into "{current.kind}"')
        absolute.append(token)
    return current, tuple(absolute)


def _array_index(token: str, length: int) -> int:
    if not token or not token.isascii() or not token.isdigit():
        raise ResolutionError(f'array index "{token}" is invalid')
    index = int(token)
    if index >= length:
        raise ResolutionError(f'array index "{token}" is out of bounds')
    return index
