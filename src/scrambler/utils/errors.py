"""Typed exceptions for span manipulation, source decoding, config and syntax."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scrambler.syntax.base import SyntaxIssue


class SpanError(ValueError):
    """Base class for span related errors."""


class OverlapError(SpanError):
    """Raised when two spans overlap."""


class SpanOutOfBoundsError(SpanError):
    """Raised when span coordinates are invalid or out of bounds."""


class IOFormatError(ValueError):
    """Raised when a source file cannot be decoded."""


class ConfigError(ValueError):
    """Raised for settings that pass schema validation but cannot be used."""


class DocumentSyntaxError(ValueError):
    """Raised when a document cannot be tokenized cleanly."""

    def __init__(self, issues: list[SyntaxIssue]) -> None:
        self.issues = list(issues)
        rendered = ", ".join(str(issue) for issue in self.issues)
        super().__init__(f"Syntax errors: [{rendered}]")
