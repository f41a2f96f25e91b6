"""Utility functions for working with text spans.

Spans are half-open intervals ``[start, end)`` with zero-based offsets.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterator
from typing import Literal

_WORD_RE = re.compile(r"[^\W_]+")


def build_line_starts(text: str) -> tuple[int, ...]:
    """Return the starting character index for each line in ``text``."""

    starts = [0]
    for idx, char in enumerate(text):
        if char == "\n":
            starts.append(idx + 1)
    return tuple(starts)


def char_to_line_col(index: int, line_starts: tuple[int, ...]) -> tuple[int, int]:
    """Convert a character index to ``(line, col)`` using ``line_starts``.

    Line and column numbers are zero-based.
    """

    if index < 0:
        raise ValueError("index must be non-negative")
    line = bisect_right(line_starts, index) - 1
    if line < 0:
        line = 0
    col = index - line_starts[line]
    return line, col


def describe_offset(text: str, index: int) -> str:
    """Return ``"line:col"`` (one-based) for ``index`` in ``text``."""

    line, col = char_to_line_col(index, build_line_starts(text))
    return f"{line + 1}:{col + 1}"


def iter_words(text: str, start: int = 0, end: int | None = None) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` of every alphanumeric run in ``text[start:end]``.

    A word is a maximal run of characters for which :meth:`str.isalnum` holds.
    Offsets refer to ``text``.
    """

    stop = len(text) if end is None else end
    for match in _WORD_RE.finditer(text, start, stop):
        yield match.start(), match.end()


def detect_text_case(s: str) -> Literal["UPPER", "LOWER", "TITLE", "MIXED"]:
    """Detect the predominant case of ``s``."""

    if s.isupper():
        return "UPPER"
    if s.islower():
        return "LOWER"
    if s.istitle():
        return "TITLE"
    return "MIXED"
