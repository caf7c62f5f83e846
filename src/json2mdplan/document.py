"""Immutable, order-preserving JSON document model.

Numbers keep their source text so rendered output and pointers stay
byte-stable across runs. Object members keep insertion order, which fixes
the order of :meth:`Node.leaf_paths` and therefore of coverage failures.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, List, Optional, Sequence, Tuple, Union

KIND_OBJECT = "object"
KIND_ARRAY = "array"
KIND_STRING = "string"
KIND_NUMBER = "number"
KIND_BOOLEAN = "boolean"
KIND_NULL = "null"

SCALAR_KINDS = frozenset({KIND_STRING, KIND_NUMBER, KIND_BOOLEAN, KIND_NULL})

# json.loads pairs escaped surrogates, so any left over are unpaired.
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")
REPLACEMENT_CHARACTER = "\ufffd"


class DocumentParseError(ValueError):
    """Raised when input bytes are not a single well-formed JSON value."""


def escape_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def encode_pointer(tokens: Sequence[str]) -> str:
    """Join raw tokens into an absolute pointer; no tokens is the root ``""``."""

    if not tokens:
        return ""
    return "/" + "/".join(escape_token(token) for token in tokens)


class Node:
    """Base of the closed set of JSON node variants."""

    __slots__ = ()

    kind: ClassVar[str] = ""

    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    def format_scalar(self) -> str:
        raise TypeError(f"node kind {self.kind!r} is not scalar")

    def find_field(self, name: str) -> Optional["Node"]:
        return None

    def leaf_paths(self, base: Sequence[str] = ()) -> List[str]:
        """Return the pointer of every scalar under this node, in document order."""

        return list(_iter_leaf_paths(self, tuple(base)))

    def to_python(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ObjectField:
    name: str
    value: Node


@dataclass(frozen=True, slots=True)
class ObjectNode(Node):
    fields: Tuple[ObjectField, ...] = ()

    kind: ClassVar[str] = KIND_OBJECT

    def find_field(self, name: str) -> Optional[Node]:
        # Last match wins for duplicate names.
        for field in reversed(self.fields):
            if field.name == name:
                return field.value
        return None

    def keys(self) -> List[str]:
        return [field.name for field in self.fields]

    def to_python(self) -> Any:
        return {field.name: field.value.to_python() for field in self.fields}


@dataclass(frozen=True, slots=True)
class ArrayNode(Node):
    items: Tuple[Node, ...] = ()

    kind: ClassVar[str] = KIND_ARRAY

    def to_python(self) -> Any:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class StringNode(Node):
    value: str

    kind: ClassVar[str] = KIND_STRING

    def format_scalar(self) -> str:
        return self.value

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class NumberNode(Node):
    text: str

    kind: ClassVar[str] = KIND_NUMBER

    def format_scalar(self) -> str:
        return self.text

    def to_python(self) -> Any:
        if any(marker in self.text for marker in ".eE"):
            return float(self.text)
        return int(self.text)


@dataclass(frozen=True, slots=True)
class BooleanNode(Node):
    value: bool

    kind: ClassVar[str] = KIND_BOOLEAN

    def format_scalar(self) -> str:
        return "true" if self.value else "false"

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class NullNode(Node):
    kind: ClassVar[str] = KIND_NULL

    def format_scalar(self) -> str:
        return "null"

    def to_python(self) -> Any:
        return None


def parse_document(data: Union[bytes, str]) -> Node:
    """Parse one JSON value; trailing non-whitespace content is an error.

    Unpaired surrogate escapes such as ``"\\ud800"`` decode to U+FFFD so every
    string stays encodable as UTF-8.
    """

    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentParseError(f"input is not valid UTF-8: {exc}") from exc
    else:
        text = data

    try:
        parsed = json.loads(
            text,
            object_pairs_hook=_object_from_pairs,
            parse_int=NumberNode,
            parse_float=NumberNode,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as exc:
        raise DocumentParseError(str(exc)) from exc
    return _as_node(parsed)


def _object_from_pairs(pairs: List[Tuple[str, Any]]) -> ObjectNode:
    return ObjectNode(
        tuple(ObjectField(_clean_text(name), _as_node(value)) for name, value in pairs)
    )


def _reject_constant(name: str) -> Node:
    raise DocumentParseError(f"unsupported JSON literal {name!r}")


def _as_node(value: Any) -> Node:
    if isinstance(value, Node):
        return value
    if isinstance(value, str):
        return StringNode(_clean_text(value))
    if isinstance(value, bool):
        return BooleanNode(value)
    if value is None:
        return NullNode()
    if isinstance(value, list):
        return ArrayNode(tuple(_as_node(item) for item in value))
    raise DocumentParseError(f"unsupported JSON token type {type(value).__name__}")


def _clean_text(value: str) -> str:
    return _LONE_SURROGATE.sub(REPLACEMENT_CHARACTER, value)


def _iter_leaf_paths(node: Node, base: Tuple[str, ...]) -> Iterator[str]:
    if isinstance(node, ObjectNode):
        for field in node.fields:
            yield from _iter_leaf_paths(field.value, base + (field.name,))
    elif isinstance(node, ArrayNode):
        for index, item in enumerate(node.items):
            yield from _iter_leaf_paths(item, base + (str(index),))
    else:
        yield encode_pointer(base)
