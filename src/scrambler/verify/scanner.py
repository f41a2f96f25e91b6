"""Structure verification for scrambled documents.

Substitution only rewrites alphanumeric runs inside content segments, so the
scrambled document must tokenize into exactly the same non-content segments as
the source.  :func:`scan_text` re-tokenizes the output and compares the two
structural signatures.  A difference means a substitute changed how the
document parses (for instance a wordlist entry that turned plain text into a
link) and the output should not be trusted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import zip_longest

from scrambler.syntax.base import Segment, SegmentKind, SyntaxIssue, TokenizedDocument
from scrambler.syntax.classifier import ContentPolicy, is_content
from scrambler.syntax.tokenizer import tokenize

__all__ = [
    "StructureMismatch",
    "VerificationReport",
    "structural_signature",
    "scan_text",
]


@dataclass(frozen=True, slots=True)
class StructureMismatch:
    """A position where the structural signatures differ."""

    index: int
    expected: tuple[str, str] | None
    found: tuple[str, str] | None


@dataclass(frozen=True, slots=True)
class VerificationReport:
    """Structured result of a verification scan."""

    syntax_segments: int
    issues: list[SyntaxIssue] = field(default_factory=list)
    mismatches: list[StructureMismatch] = field(default_factory=list)

    @property
    def residual_count(self) -> int:
        return len(self.issues) + len(self.mismatches)

    @property
    def ok(self) -> bool:
        return self.residual_count == 0


def structural_signature(
    segments: tuple[Segment, ...] | list[Segment], policy: ContentPolicy
) -> list[tuple[SegmentKind, str]]:
    """Return ``(kind, text)`` of every segment that is not content."""

    return [(seg.kind, seg.text) for seg in segments if not is_content(seg, policy)]


def scan_text(
    before: TokenizedDocument,
    after_text: str,
    policy: ContentPolicy,
) -> VerificationReport:
    """Compare the structure of ``after_text`` against ``before``."""

    after = tokenize(after_text)
    expected = structural_signature(before.segments, policy)
    found = structural_signature(after.segments, policy)

    mismatches: list[StructureMismatch] = []
    for idx, (exp, got) in enumerate(zip_longest(expected, found)):
        if exp == got:
            continue
        mismatches.append(
            StructureMismatch(
                index=idx,
                expected=(exp[0].value, exp[1]) if exp else None,
                found=(got[0].value, got[1]) if got else None,
            )
        )

    return VerificationReport(
        syntax_segments=len(expected),
        issues=list(after.issues),
        mismatches=mismatches,
    )
