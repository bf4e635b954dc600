"""Shared pytest fixtures for the jr-scripts test suite.

Provides reusable fixtures for:
- Synthetic environments
- Small template trees on disk
- Pipeline contexts rooted in tmp_path
- Python one-liner commands for the process runner
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from jr_scripts.environment import Environment
from jr_scripts.steps import PipelineContext


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture
def os_environment() -> Environment:
    """Snapshot of the real environment (child processes need PATH etc.)."""
    return Environment(dict(os.environ))


@pytest.fixture
def empty_environment() -> Environment:
    return Environment({})


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree():
    """Expose :func:`write_tree` to tests."""
    return write_tree


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A small template tree with nested dirs, a partial and a non-template file."""
    return write_tree(
        tmp_path / "templates",
        {
            ".env.local.j2": "DATABASE_URL={{ DATABASE_URL }}\nAPP={{ app_name }}\n",
            "README.md.j2": "# {{ app_name }}\n",
            "src/lib/auth.ts.j2": "export const name = '{{ app_name }}';\n",
            "src/app/api/auth/[...all]/route.ts.j2": "// {{ app_name }}\n",
            "_partials/header.j2": "// header for {{ app_name }}\n",
            "notes.txt": "not a template\n",
        },
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "my-app"
    root.mkdir()
    return root


@pytest.fixture
def pipeline_context(tmp_path: Path, project_root: Path, os_environment: Environment) -> PipelineContext:
    return PipelineContext(
        project_root=project_root,
        cwd=tmp_path,
        environment=os_environment,
        data={"app_name": "my-app"},
        verbose=False,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@pytest.fixture
def python() -> str:
    """Interpreter used to spawn deterministic child processes."""
    return sys.executable
