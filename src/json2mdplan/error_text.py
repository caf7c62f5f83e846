from __future__ import annotations

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def _stringify(value: PathLike | None) -> str:
    if value is None:
        return "-"
    return str(value)


def file_not_found(path: PathLike) -> str:
    return f"file not found: {_stringify(path)}"


def permission_denied(path: PathLike) -> str:
    return f"permission denied: {_stringify(path)}"


def read_failed(path: PathLike, detail: str) -> str:
    return f"failed to read {_stringify(path)}: {detail}"


def write_failed(path: PathLike, detail: str) -> str:
    return f"failed to write output file {_stringify(path)}: {detail}"


def missing_input(name: str) -> str:
    return f"missing {name} input"


def conflicting_inputs(name: str) -> str:
    return f"only one of --{name} or --{name}-file may be provided"


def invalid_document(detail: str) -> str:
    return f"invalid JSON instance: {detail}"


def invalid_plan(detail: str) -> str:
    return f"invalid plan: {detail}"


def invalid_schema(detail: str) -> str:
    return f"invalid JSON schema: {detail}"
