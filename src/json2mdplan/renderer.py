"""Markdown fragment helpers shared by the directive handlers."""

from __future__ import annotations

from typing import List, Sequence

TABLE_SEPARATOR_CELL = "---"


def format_bullet(value: str) -> str:
    return f"- {value}"


def format_named_bullet(label: str, value: str) -> str:
    return format_bullet(f"**{label}:** {value}")


def format_table_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def format_table_header(labels: Sequence[str]) -> List[str]:
    """Return the header row and the separator row for ``labels``."""

    return [
        format_table_row(labels),
        format_table_row([TABLE_SEPARATOR_CELL] * len(labels)),
    ]
