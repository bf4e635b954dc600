"""Unit tests for development-checkout detection (jr_scripts.devmode)."""

from __future__ import annotations

from pathlib import Path

import pytest

from jr_scripts.devmode import FORCE_DEV_VAR, is_dev_environment
from jr_scripts.environment import Environment

pytestmark = pytest.mark.unit


@pytest.fixture
def checkout(tmp_path: Path) -> Path:
    """A fake source checkout: pyproject.toml + .git with a nested package dir."""
    root = tmp_path / "checkout"
    (root / ".git").mkdir(parents=True)
    (root / "pyproject.toml").write_text("[project]\nname = 'x'\n")
    package = root / "jr_scripts" / "commands"
    package.mkdir(parents=True)
    return root


class TestIsDevEnvironment:
    def test_force_flag(self, tmp_path: Path):
        env = Environment({FORCE_DEV_VAR: "1"})
        assert is_dev_environment(env, start=tmp_path) is True

    def test_force_flag_other_values_ignored(self, tmp_path: Path):
        env = Environment({FORCE_DEV_VAR: "0"})
        assert is_dev_environment(env, start=tmp_path) is False

    def test_manifest_with_git_is_checkout(self, checkout: Path, empty_environment: Environment):
        assert is_dev_environment(empty_environment, start=checkout / "jr_scripts" / "commands") is True

    def test_manifest_without_git(self, checkout: Path, empty_environment: Environment):
        (checkout / ".git").rmdir()
        assert is_dev_environment(empty_environment, start=checkout / "jr_scripts") is False

    def test_nearest_manifest_decides(self, checkout: Path, empty_environment: Environment):
        inner = checkout / "vendor" / "pkg"
        inner.mkdir(parents=True)
        (inner / "pyproject.toml").write_text("")
        assert is_dev_environment(empty_environment, start=inner) is False

    def test_git_file_counts(self, tmp_path: Path, empty_environment: Environment):
        # Worktrees and submodules have a .git file instead of a directory.
        root = tmp_path / "worktree"
        root.mkdir()
        (root / ".git").write_text("gitdir: /elsewhere\n")
        (root / "pyproject.toml").write_text("")
        assert is_dev_environment(empty_environment, start=root) is True

    def test_depth_is_bounded(self, checkout: Path, empty_environment: Environment):
        deep = checkout / "a" / "b" / "c" / "d" / "e" / "f" / "g"
        deep.mkdir(parents=True)
        assert is_dev_environment(empty_environment, start=deep, max_depth=3) is False
        assert is_dev_environment(empty_environment, start=deep, max_depth=8) is True

    def test_no_manifest_anywhere(self, tmp_path: Path, empty_environment: Environment):
        start = tmp_path / "x" / "y"
        start.mkdir(parents=True)
        assert is_dev_environment(empty_environment, start=start, max_depth=2) is False

    def test_install_inside_checkout_is_not_dev(self, tmp_path: Path, empty_environment: Environment):
        project = tmp_path / "someproject"
        (project / ".git").mkdir(parents=True)
        (project / "pyproject.toml").write_text("")
        package = project / ".venv" / "lib" / "python3.12" / "site-packages" / "jr_scripts"
        package.mkdir(parents=True)
        assert is_dev_environment(empty_environment, start=package) is False

    def test_dist_packages_stops_walk(self, tmp_path: Path, empty_environment: Environment):
        (tmp_path / ".git").mkdir()
        (tmp_path / "pyproject.toml").write_text("")
        package = tmp_path / "dist-packages" / "jr_scripts"
        package.mkdir(parents=True)
        assert is_dev_environment(empty_environment, start=package) is False
