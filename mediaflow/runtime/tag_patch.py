"""
tag_patch.py - Additive/subtractive tag patches.

A patch is a sequence of tokens applied left to right:
- ``tag`` adds ``tag``
- ``-tag`` (any number of leading minus characters) removes ``tag``

Usage:
    from mediaflow.runtime.tag_patch import apply_tag_patch, parse_tag_patch

    tags = apply_tag_patch({"draft", "engage"}, parse_tag_patch("archive,-draft"))
    # {"engage", "archive"}
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Set

_SEPARATORS = re.compile(r"[,\s]+")


def parse_tag_patch(expression: Optional[str]) -> List[str]:
    """Split a patch expression on commas and whitespace, dropping empty tokens."""
    if not expression:
        return []
    return [token for token in _SEPARATORS.split(expression) if token]


def apply_tag_patch(current: Iterable[str], patch: Iterable[str]) -> Set[str]:
    """Return a new tag set with ``patch`` applied to ``current``.

    ``current`` is not modified. A token made only of minus characters
    removes the empty tag, which is a no-op in practice.
    """
    tags = set(current)
    for token in patch:
        if token.startswith("-"):
            tags.discard(token.lstrip("-"))
        else:
            tags.add(token)
    return tags
