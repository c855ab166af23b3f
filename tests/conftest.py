import sys
from pathlib import Path
from typing import Callable

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'graphql_projects' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from graphql_projects.config import ConfigResult, GraphQLConfig


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty directory that holds a config file and its schema files."""
    root = tmp_path / "proj"
    root.mkdir()
    return root


@pytest.fixture
def make_config(project_dir: Path) -> Callable[..., GraphQLConfig]:
    """Build a GraphQLConfig as if read from ``<project_dir>/graphql.config.json``."""

    def _make(raw: dict, extensions=()) -> GraphQLConfig:
        filepath = str(project_dir / "graphql.config.json")
        return GraphQLConfig(ConfigResult(config=raw, filepath=filepath), extensions)

    return _make
