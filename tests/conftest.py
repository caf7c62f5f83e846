"""Global pytest configuration for json2mdplan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from json2mdplan.document import Node, parse_document
from json2mdplan.plan import Plan, parse_plan


def pytest_addoption(parser) -> None:
    """Register project-specific pytest flags."""

    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Rewrite golden Markdown and diagnostic fixtures from current output.",
    )


@pytest.fixture(scope="session")
def golden_writer(pytestconfig):
    """Return a helper that rewrites golden files when requested."""

    return GoldenWriter(enabled=bool(pytestconfig.getoption("--update-golden")))


class GoldenWriter:
    """Rewrites golden fixtures with the current output when enabled."""

    def __init__(self, *, enabled: bool) -> None:
        self.enabled = enabled

    def maybe_write(self, path: Path, text: str) -> None:
        if not self.enabled:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")


@pytest.fixture
def doc():
    """Parse a JSON literal into a document tree."""

    def _parse(text: str) -> Node:
        return parse_document(text)

    return _parse


@pytest.fixture
def plan_of():
    """Parse a plan literal."""

    def _parse(text: str) -> Plan:
        return parse_plan(text)

    return _parse
