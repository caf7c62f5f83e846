"""Test package helpers shared across json2mdplan suites."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Tuple

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
CASES_DIR = FIXTURES_DIR / "cases"
ENCODING = "utf-8"


def read_text(path: Path) -> str:
    return path.read_text(encoding=ENCODING)


def normalize_fixture_text(value: str) -> str:
    """Golden files may end with newlines the renderer never emits."""

    return value.rstrip("\n")


def case_dirs() -> List[Path]:
    return sorted(path for path in CASES_DIR.iterdir() if path.is_dir())


def plan_files(case_dir: Path, kind: str) -> Iterator[Tuple[str, Path]]:
    """Yield ``(name, plan_path)`` for ``valid-plans`` or ``invalid-plans``."""

    plans_dir = case_dir / f"{kind}-plans"
    if not plans_dir.is_dir():
        return
    for plan_path in sorted(plans_dir.glob("*.json")):
        yield plan_path.stem, plan_path
