"""Decide which segments of a tokenized document count as content.

Prose, comment bodies and link targets are content by default.  String
literals and raw bodies are treated as syntax unless the policy is aggressive,
because changing them is more likely to change how the document behaves.
Equations, code, module statements and markup syntax are never content.
"""

from __future__ import annotations

from dataclasses import dataclass

from scrambler.config import ConfigModel

from .base import Segment, SegmentKind

_NEVER_CONTENT = frozenset(
    {SegmentKind.MATH, SegmentKind.CODE, SegmentKind.MODULE, SegmentKind.SYNTAX}
)


@dataclass(slots=True, frozen=True)
class ContentPolicy:
    """Flags selecting the segment kinds eligible for substitution."""

    text: bool = True
    comments: bool = True
    links: bool = True
    strings: bool = False
    raw: bool = False

    @classmethod
    def from_config(cls, cfg: ConfigModel) -> ContentPolicy:
        opts = cfg.content
        policy = cls(
            text=opts.text,
            comments=opts.comments,
            links=opts.links,
            strings=opts.strings,
            raw=opts.raw,
        )
        return policy.widened() if opts.aggressive else policy

    def widened(self) -> ContentPolicy:
        """Return the aggressive variant that also covers strings and raw text."""

        return ContentPolicy(
            text=self.text,
            comments=self.comments,
            links=self.links,
            strings=True,
            raw=True,
        )

    def kinds(self) -> frozenset[SegmentKind]:
        selected = {
            SegmentKind.TEXT: self.text,
            SegmentKind.COMMENT: self.comments,
            SegmentKind.LINK: self.links,
            SegmentKind.STRING: self.strings,
            SegmentKind.RAW: self.raw,
        }
        return frozenset(kind for kind, enabled in selected.items() if enabled)


def is_content(segment: Segment, policy: ContentPolicy) -> bool:
    """Return ``True`` if ``segment`` may be substituted under ``policy``."""

    if segment.kind in _NEVER_CONTENT:
        return False
    return segment.kind in policy.kinds()


def classify(segments: tuple[Segment, ...] | list[Segment], policy: ContentPolicy) -> list[Segment]:
    """Return the content segments of ``segments`` in document order."""

    kinds = policy.kinds()
    return [seg for seg in segments if seg.kind in kinds and seg.kind not in _NEVER_CONTENT]


__all__ = ["ContentPolicy", "classify", "is_content"]
