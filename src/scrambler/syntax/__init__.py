"""Structural awareness for Typst sources: segments, tokenizer, classifier."""

from .base import Segment, SegmentKind, SyntaxIssue, TokenizedDocument
from .classifier import ContentPolicy, classify, is_content
from .tokenizer import tokenize

__all__ = [
    "ContentPolicy",
    "Segment",
    "SegmentKind",
    "SyntaxIssue",
    "TokenizedDocument",
    "classify",
    "is_content",
    "tokenize",
]
