"""Directive registry and dispatcher."""

from __future__ import annotations

import inspect
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Type

from .. import diagnostics
from ..constants import CODE_UNKNOWN_DIRECTIVE
from ..document import Node
from ..plan import Directive
from .base import DirectiveHandler, DirectiveResult

logger = logging.getLogger(__name__)

_registry: Dict[str, Type[DirectiveHandler]] = {}


def register(handler_cls: Type[DirectiveHandler]) -> Type[DirectiveHandler]:
    if handler_cls.op in _registry:
        raise ValueError(f"directive {handler_cls.op!r} is already registered")
    _registry[handler_cls.op] = handler_cls
    return handler_cls


def execute(root: Node, directive_index: int, directive: Directive) -> DirectiveResult:
    """Run ``directive`` through the handler registered for its op."""

    handler = HANDLERS.get(directive.op)
    if handler is None:
        raise diagnostics.new(
            CODE_UNKNOWN_DIRECTIVE,
            directive_index,
            directive.path,
            f'directive "{directive.op}" is not supported',
        )
    result = handler.execute(root, directive_index, directive)
    logger.debug(
        "directive %d op=%s path=%r lines=%d consumed=%d",
        directive_index,
        directive.op,
        directive.path,
        len(result.lines),
        len(result.consumed),
    )
    return result


def build_directive_manifest() -> List[Dict[str, Any]]:
    """Return deterministic manifest entries for every registered directive."""

    manifest: List[Dict[str, Any]] = []
    for op in sorted(HANDLERS):
        handler_cls = HANDLERS[op]
        manifest.append(
            {
                "op": op,
                "target_kind": handler_cls.target_kind,
                "fields": "required" if handler_cls.fields_required else "forbidden",
                "python_class": f"{handler_cls.__module__}.{handler_cls.__name__}",
                "description": inspect.cleandoc(handler_cls.__doc__ or ""),
            }
        )
    return manifest


# Handlers register with the decorator at import time.
from . import bullet_list as _bullet_list  # noqa: F401,E402
from . import named_bullets as _named_bullets  # noqa: F401,E402
from . import table as _table  # noqa: F401,E402

HANDLERS: Mapping[str, Type[DirectiveHandler]] = MappingProxyType(dict(_registry))

__all__ = [
    "DirectiveHandler",
    "DirectiveResult",
    "HANDLERS",
    "build_directive_manifest",
    "execute",
    "register",
]
