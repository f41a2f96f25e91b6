"""Core segment model shared by the tokenizer, classifier and verifier.

A tokenized document is a flat, gap-free sequence of :class:`Segment` objects.
Offsets follow the half-open convention ``[start, end)`` and concatenating
every segment's ``text`` reproduces the source exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scrambler.utils.errors import SpanOutOfBoundsError


class SegmentKind(Enum):
    """Role of a run of characters in a Typst document."""

    TEXT = "TEXT"
    COMMENT = "COMMENT"
    STRING = "STRING"
    RAW = "RAW"
    LINK = "LINK"
    MATH = "MATH"
    CODE = "CODE"
    MODULE = "MODULE"
    SYNTAX = "SYNTAX"


@dataclass(slots=True, frozen=True)
class Segment:
    """A contiguous run of characters sharing one :class:`SegmentKind`."""

    start: int
    end: int
    text: str
    kind: SegmentKind

    def __post_init__(self) -> None:
        if self.end <= self.start or self.start < 0:
            raise SpanOutOfBoundsError(f"invalid segment [{self.start}, {self.end})")
        if len(self.text) != self.end - self.start:
            raise ValueError("segment text does not match its offsets")


@dataclass(slots=True, frozen=True)
class SyntaxIssue:
    """A problem found while tokenizing, located by character offset."""

    offset: int
    message: str

    def __str__(self) -> str:
        return f"{self.message} at offset {self.offset}"


@dataclass(slots=True, frozen=True)
class TokenizedDocument:
    """Result of :func:`scrambler.syntax.tokenizer.tokenize`."""

    text: str
    segments: tuple[Segment, ...]
    issues: tuple[SyntaxIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues


__all__ = ["SegmentKind", "Segment", "SyntaxIssue", "TokenizedDocument"]
