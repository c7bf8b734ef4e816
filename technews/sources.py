"""
Feed source allow-list.
"""
from __future__ import annotations

from typing import Iterable, Optional


def resolve_source(candidate: Optional[str], allowed: Iterable[str], default: str) -> str:
    """
    Map a caller-supplied feed URL to an approved one.

    Only exact allow-list matches pass through; anything else (including a
    missing value) resolves to ``default`` so unapproved URLs never reach the
    network layer.
    """
    if not candidate:
        return default
    if candidate in tuple(allowed):
        return candidate
    return default
