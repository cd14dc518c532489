"""Grapheme-aware text helpers."""

from __future__ import annotations

import regex

_GRAPHEME = regex.compile(r"\X")


def grapheme_count(text: str) -> int:
    return sum(1 for _ in _GRAPHEME.finditer(text))


def truncate_graphemes(text: str, width: int) -> str:
    """Keep the first ``width`` user-perceived characters of ``text``.

    Combining marks and multi-codepoint emoji stay attached to their base
    character.
    """
    if width <= 0:
        return ""
    end = 0
    for count, match in enumerate(_GRAPHEME.finditer(text), start=1):
        end = match.end()
        if count >= width:
            break
    return text[:end]
