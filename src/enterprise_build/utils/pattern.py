"""Wildcard matching for property keys and Maven coordinates."""

from __future__ import annotations

from typing import Iterable

__all__ = ["match_pattern", "match_any"]


def match_pattern(pattern: str, value: str) -> bool:
    """Match ``value`` against a pattern where ``*`` stands for any run of characters.

    ``*`` crosses ``.`` and ``:`` boundaries, so ``com.github.*`` matches every
    group below ``com.github`` and ``*:VaultAPI`` matches that artifact in any
    group. A pattern without ``*`` must equal the value.
    """
    head, *rest = pattern.split("*")
    if not rest:
        return pattern == value
    if not value.startswith(head):
        return False

    tail = rest.pop()
    if len(value) - len(head) < len(tail) or not value.endswith(tail):
        return False

    cursor = len(head)
    limit = len(value) - len(tail)
    for fragment in rest:
        found = value.find(fragment, cursor, limit)
        if found < 0:
            return False
        cursor = found + len(fragment)
    return True


def match_any(patterns: Iterable[str], value: str) -> bool:
    """Return True if any of ``patterns`` matches ``value``."""
    return any(match_pattern(p, value) for p in patterns)
