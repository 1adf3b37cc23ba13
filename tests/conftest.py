from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from settergen.models import SourceUnit
from settergen.scanner import DeclarationScanner
from tests._fixtures.go_builder import GoTreeBuilder


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTreeBuilder:
    """Provide a reusable Go source tree rooted at the pytest tmp_path."""
    return GoTreeBuilder(tmp_path)


@pytest.fixture
def scan_go(tmp_path: Path) -> Callable[[str], SourceUnit]:
    """Scan dedented in-memory Go source as if it lived at tmp_path/unit.go."""
    scanner = DeclarationScanner()

    def _scan(source: str, filename: str = "unit.go") -> SourceUnit:
        text = textwrap.dedent(source).lstrip("\n")
        return scanner.scan_source(text, tmp_path / filename)

    return _scan
