"""Detect whether jr-scripts is running from a development checkout.

A checkout is recognised by a ``pyproject.toml`` that sits next to a
``.git`` directory in one of the first few ancestors of this package.  The
walk stops at an install directory (``site-packages`` or ``dist-packages``),
so a project that merely contains the virtualenv never counts.  Setting
``JR_SCRIPTS_FORCE_DEV=1`` forces dev mode regardless.
"""

from __future__ import annotations

from pathlib import Path

from jr_scripts.environment import Environment

FORCE_DEV_VAR = "JR_SCRIPTS_FORCE_DEV"
MANIFEST_NAME = "pyproject.toml"
VCS_DIR_NAME = ".git"
INSTALL_DIR_NAMES = frozenset({"site-packages", "dist-packages"})
MAX_DEPTH = 6


def is_dev_environment(
    environment: Environment,
    start: str | Path | None = None,
    max_depth: int = MAX_DEPTH,
) -> bool:
    """Return ``True`` when running from a development checkout.

    Args:
        environment: Environment to consult for the force flag.
        start: Directory to begin the upward walk from.  Defaults to the
            directory containing this package.
        max_depth: Number of directory levels to inspect.

    The nearest manifest decides: if it has no sibling ``.git`` the answer
    is ``False`` even if some higher directory would qualify.
    """
    if environment.get(FORCE_DEV_VAR) == "1":
        return True

    directory = Path(start) if start is not None else Path(__file__).resolve().parent
    for _ in range(max_depth):
        if directory.name in INSTALL_DIR_NAMES:
            return False
        if (directory / MANIFEST_NAME).is_file():
            return (directory / VCS_DIR_NAME).exists()
        parent = directory.parent
        if parent == directory:
            break
        directory = parent
    return False
