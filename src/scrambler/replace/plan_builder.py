"""Replacement plan builder.

Every alphanumeric run inside a content segment becomes one
:class:`PlanEntry`.  The characters between words are never part of a plan
entry, so punctuation, whitespace and markup inside prose survive exactly.
Entries are produced in document order and never overlap.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from scrambler.pseudo.generator import WordSubstituter
from scrambler.syntax.base import Segment, SegmentKind
from scrambler.utils.errors import SpanOutOfBoundsError
from scrambler.utils.logging import get_logger
from scrambler.utils.textspan import iter_words

log = get_logger(__name__)

__all__ = ["PlanEntry", "build_replacement_plan"]


@dataclass(slots=True)
class PlanEntry:
    """Description of a single replacement operation."""

    start: int
    end: int
    replacement: str
    strategy: str
    kind: SegmentKind
    meta: dict[str, object] = field(default_factory=dict)


def build_replacement_plan(
    text: str,
    content: Iterable[Segment],
    substituter: WordSubstituter,
) -> list[PlanEntry]:
    """Return one plan entry per word found in the ``content`` segments.

    Parameters
    ----------
    text:
        The document the segments were produced from.
    content:
        Content segments, typically from
        :func:`scrambler.syntax.classifier.classify`.
    substituter:
        Source of replacement words.
    """

    plan: list[PlanEntry] = []
    for seg in content:
        if seg.end > len(text) or text[seg.start : seg.end] != seg.text:
            raise SpanOutOfBoundsError(f"segment [{seg.start}, {seg.end}) does not match text")
        for start, end in iter_words(text, seg.start, seg.end):
            sub = substituter.substitute(text[start:end])
            plan.append(PlanEntry(start, end, sub.text, sub.strategy, seg.kind))
    log.debug("planned %d replacements", len(plan))
    return plan
