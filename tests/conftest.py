from __future__ import annotations

from pathlib import Path

import pytest

from gotrim.syntax import GoParser
from tests._fixtures.go_tree import GoTree


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTree:
    """Provide a scratch Go module rooted at the pytest tmp_path."""
    return GoTree(tmp_path)


@pytest.fixture(scope="session")
def go_parser() -> GoParser:
    return GoParser()
