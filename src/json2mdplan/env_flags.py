from __future__ import annotations

import os
from typing import Optional

_TRUTHY = {"1", "true", "yes", "on"}

VERBOSE_ENV = "JSON2MDPLAN_VERBOSE"


def env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def is_verbose() -> bool:
    """Return True when DEBUG diagnostics should be logged to stderr."""

    return env_truthy(os.getenv(VERBOSE_ENV))
