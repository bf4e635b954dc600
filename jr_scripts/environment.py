"""Explicit process environment.

Components that need environment variables (the process runner, dev-mode
detection, configuration) receive an ``Environment`` instead of reading
``os.environ`` themselves.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Environment(Mapping[str, str]):
    """Immutable snapshot of environment variables."""

    variables: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_os(cls) -> "Environment":
        """Snapshot the current process environment."""
        return cls(dict(os.environ))

    def __getitem__(self, key: str) -> str:
        return self.variables[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def flag(self, key: str) -> bool:
        """Return ``True`` when *key* is set to a truthy value (``1``, ``true``, ``yes``)."""
        return self.variables.get(key, "").strip().lower() in ("1", "true", "yes")

    def merged(self, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return a plain dict of these variables with *overrides* applied on top."""
        merged = dict(self.variables)
        if overrides:
            merged.update(overrides)
        return merged
