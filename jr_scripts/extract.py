"""Recover structured values from human-oriented command output."""

from __future__ import annotations

from collections.abc import Callable

TokenPredicate = Callable[[str], bool]


def extract_first(text: str, predicate: TokenPredicate) -> str | None:
    """Return the first whitespace-delimited token of *text* accepted by *predicate*.

    Returns ``None`` when no token matches; callers decide whether that is fatal.
    """
    for token in text.split():
        if predicate(token):
            return token
    return None


def starts_with(prefix: str) -> TokenPredicate:
    """Build a predicate that accepts tokens beginning with *prefix*."""

    def _predicate(token: str) -> bool:
        return token.startswith(prefix)

    return _predicate
