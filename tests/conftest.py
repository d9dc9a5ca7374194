from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.doc_tree import DocTreeBuilder


@pytest.fixture
def doc_tree(tmp_path: Path) -> DocTreeBuilder:
    """Provide a project with an empty generator output location."""
    return DocTreeBuilder(tmp_path)
