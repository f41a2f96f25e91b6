"""Lightweight structural tokenizer for Typst documents.

This is not a Typst parser.  It only tracks the three lexical modes of the
language (markup, code and math) well enough to tell prose apart from
everything that has to survive untouched:

* Markup is the default mode.  ``#`` switches to code for one embedded
  expression or statement, ``$`` opens an equation and backticks open raw
  text.  Links, labels, references and escapes are recognised so that the
  alphanumeric characters inside them are never mistaken for prose.
* Code mode handles strings, comments, nested ``()``/``{}`` groups and
  ``[...]`` content blocks, which switch back to markup.
* Equations are kept whole.

The scanner never raises on malformed input.  Problems are collected as
:class:`~scrambler.syntax.base.SyntaxIssue` objects and the remaining text is
still covered by segments so that the output always reproduces the input.
"""

from __future__ import annotations

import re

from scrambler.utils.logging import get_logger

from .base import Segment, SegmentKind, SyntaxIssue, TokenizedDocument

log = get_logger(__name__)

_IDENT_RE = re.compile(r"[^\W\d][\w-]*")
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?(?:[eE][+-]?\d+)?(?:[A-Za-z]+|%)?")
_LINK_RE = re.compile(r"https?://")
_LABEL_RE = re.compile(r"<[\w\-.:]+>")
_REF_RE = re.compile(r"@[\w\-]+(?:[.:][\w\-]+)*")
_UNICODE_ESCAPE_RE = re.compile(r"\\u\{[^}\n]*\}?")
_MARKUP_PLAIN_RE = re.compile(r"[^\[\]/`$\\#<@h*]+")
_CODE_PLAIN_RE = re.compile(r"[^\w\"\[\](){}/`$;\n\r]+")
_LINK_TRAILING = ".,;:!?'"

_MODULE_KEYWORDS = frozenset({"import", "include"})
_STATEMENT_KEYWORDS = frozenset({"let", "set", "show", "return"})
_LOOP_KEYWORDS = frozenset({"for", "while"})

_CLOSERS = {"(": ")", "{": "}", "[": "]"}


def _skip_block_comment(text: str, idx: int) -> int:
    """Return the index just past the (nested) block comment opening at ``idx``."""

    depth = 0
    n = len(text)
    while idx < n:
        if text.startswith("/*", idx):
            depth += 1
            idx += 2
        elif text.startswith("*/", idx):
            depth -= 1
            idx += 2
            if depth == 0:
                return idx
        else:
            idx += 1
    return n


class _Scanner:
    """Single-use scanner that fills ``parts`` and ``issues``."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.n = len(text)
        self.pos = 0
        self.parts: list[list[object]] = []
        self.issues: list[SyntaxIssue] = []

    # -- emission ---------------------------------------------------------

    def emit(self, kind: SegmentKind, start: int, end: int) -> None:
        if end <= start:
            return
        if self.parts:
            last = self.parts[-1]
            if last[0] is kind and last[2] == start:
                last[2] = end
                return
        self.parts.append([kind, start, end])

    def take(self, kind: SegmentKind, length: int) -> None:
        start = self.pos
        self.pos = min(self.n, self.pos + length)
        self.emit(kind, start, self.pos)

    def collapse(self, mark: int, start: int, kind: SegmentKind) -> None:
        """Replace every part emitted since ``mark`` with one ``kind`` part."""

        del self.parts[mark:]
        self.emit(kind, start, self.pos)

    def issue(self, offset: int, message: str) -> None:
        self.issues.append(SyntaxIssue(offset, message))

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def peek(self, ahead: int = 0) -> str:
        idx = self.pos + ahead
        return self.text[idx] if idx < self.n else ""

    # -- markup -----------------------------------------------------------

    def markup(self, in_block: bool) -> None:
        """Scan markup until EOF or, when ``in_block``, an unmatched ``]``."""

        depth = 0
        text = self.text
        while self.pos < self.n:
            c = text[self.pos]
            if c == "]":
                if depth:
                    depth -= 1
                    self.take(SegmentKind.TEXT, 1)
                    continue
                if in_block:
                    return
                self.issue(self.pos, "unexpected closing bracket")
                self.take(SegmentKind.SYNTAX, 1)
            elif c == "[":
                depth += 1
                self.take(SegmentKind.TEXT, 1)
            elif self.startswith("//"):
                self.line_comment()
            elif self.startswith("/*"):
                self.block_comment()
            elif self.startswith("*/"):
                self.issue(self.pos, "unexpected end of block comment")
                self.take(SegmentKind.SYNTAX, 2)
            elif c == "`":
                self.raw()
            elif c == "$":
                self.math()
            elif c == "\\":
                self.escape()
            elif c == "#":
                self.embedded(in_block or depth > 0)
            elif c == "<" and (m := _LABEL_RE.match(text, self.pos)):
                self.take(SegmentKind.SYNTAX, m.end() - m.start())
            elif c == "@" and (m := _REF_RE.match(text, self.pos)):
                self.take(SegmentKind.SYNTAX, m.end() - m.start())
            elif c == "h" and (m := self.link_scheme()):
                self.link(m)
            else:
                m = _MARKUP_PLAIN_RE.match(text, self.pos)
                self.take(SegmentKind.TEXT, m.end() - m.start() if m else 1)

    def link_scheme(self) -> re.Match[str] | None:
        if self.pos and self.text[self.pos - 1].isalnum():
            return None
        return _LINK_RE.match(self.text, self.pos)

    def link(self, m: re.Match[str]) -> None:
        self.take(SegmentKind.SYNTAX, m.end() - m.start())
        start = self.pos
        end = start
        stack: list[str] = []
        while end < self.n:
            c = self.text[end]
            if c.isspace() or c in '<>"`':
                break
            if c in "([":
                stack.append(_CLOSERS[c])
            elif c in ")]":
                if not stack or stack[-1] != c:
                    break
                stack.pop()
            end += 1
        while end > start and self.text[end - 1] in _LINK_TRAILING:
            end -= 1
        self.pos = end
        self.emit(SegmentKind.LINK, start, end)

    def escape(self) -> None:
        m = _UNICODE_ESCAPE_RE.match(self.text, self.pos)
        if m:
            if not m.group().endswith("}"):
                self.issue(self.pos, "unclosed unicode escape")
            self.take(SegmentKind.SYNTAX, m.end() - m.start())
        else:
            self.take(SegmentKind.SYNTAX, 2)

    # -- shared lexical elements -----------------------------------------

    def line_comment(self) -> None:
        self.take(SegmentKind.SYNTAX, 2)
        start = self.pos
        while self.pos < self.n and self.text[self.pos] not in "\r\n":
            self.pos += 1
        self.emit(SegmentKind.COMMENT, start, self.pos)

    def block_comment(self) -> None:
        opened = self.pos
        self.take(SegmentKind.SYNTAX, 2)
        start = self.pos
        depth = 1
        while self.pos < self.n:
            if self.startswith("/*"):
                depth += 1
                self.pos += 2
            elif self.startswith("*/"):
                depth -= 1
                if depth == 0:
                    break
                self.pos += 2
            else:
                self.pos += 1
        self.emit(SegmentKind.COMMENT, start, self.pos)
        if depth:
            self.issue(opened, "unclosed block comment")
        else:
            self.take(SegmentKind.SYNTAX, 2)

    def raw(self) -> None:
        opened = self.pos
        ticks = 0
        while self.peek(ticks) == "`":
            ticks += 1
        if ticks == 2:
            self.take(SegmentKind.SYNTAX, 2)
            return
        fence = "`" * ticks
        self.take(SegmentKind.SYNTAX, ticks)
        if ticks >= 3:
            m = _IDENT_RE.match(self.text, self.pos)
            if m:
                self.take(SegmentKind.SYNTAX, m.end() - m.start())
        close = self.text.find(fence, self.pos)
        if close == -1:
            self.issue(opened, "unclosed raw text")
            self.emit(SegmentKind.RAW, self.pos, self.n)
            self.pos = self.n
            return
        self.emit(SegmentKind.RAW, self.pos, close)
        self.pos = close
        self.take(SegmentKind.SYNTAX, ticks)

    def math(self) -> None:
        start = self.pos
        idx = start + 1
        text = self.text
        while idx < self.n:
            c = text[idx]
            if c == "\\":
                idx += 2
            elif c == '"':
                idx += 1
                while idx < self.n and text[idx] != '"':
                    idx += 2 if text[idx] == "\\" else 1
                idx += 1
            elif text.startswith("//", idx):
                newline = text.find("\n", idx)
                idx = self.n if newline == -1 else newline
            elif text.startswith("/*", idx):
                idx = _skip_block_comment(text, idx)
            elif c == "$":
                break
            else:
                idx += 1
        if idx >= self.n:
            self.issue(start, "unclosed equation")
            self.pos = self.n
        else:
            self.pos = idx + 1
        self.emit(SegmentKind.MATH, start, self.pos)

    def string(self) -> None:
        opened = self.pos
        self.take(SegmentKind.SYNTAX, 1)
        text = self.text
        while self.pos < self.n:
            c = text[self.pos]
            if c == '"':
                self.take(SegmentKind.SYNTAX, 1)
                return
            if c == "\\":
                m = _UNICODE_ESCAPE_RE.match(text, self.pos)
                self.take(SegmentKind.SYNTAX, m.end() - m.start() if m else 2)
                continue
            start = self.pos
            while self.pos < self.n and text[self.pos] not in '"\\':
                self.pos += 1
            self.emit(SegmentKind.STRING, start, self.pos)
        self.issue(opened, "unclosed string")

    def content_block(self) -> None:
        opened = self.pos
        self.take(SegmentKind.SYNTAX, 1)
        self.markup(in_block=True)
        if self.peek() == "]":
            self.take(SegmentKind.SYNTAX, 1)
        else:
            self.issue(opened, "unclosed content block")

    # -- code ---------------------------------------------------------------

    def group(self) -> None:
        """Scan a ``(...)`` or ``{...}`` group including its delimiters."""

        opened = self.pos
        closer = _CLOSERS[self.text[self.pos]]
        self.take(SegmentKind.CODE, 1)
        self.code(closer)
        if self.peek() == closer:
            self.take(SegmentKind.CODE, 1)
        else:
            self.issue(opened, f"unclosed delimiter, expected '{closer}'")

    def code(
        self,
        terminators: str,
        *,
        stop_at_newline: bool = False,
        stop_at_block: bool = False,
    ) -> None:
        """Scan code until a terminator, which is left unconsumed.

        With ``stop_at_newline`` the scan also ends before a line break and
        after a semicolon.  With ``stop_at_block`` it ends before a ``{`` or
        ``[`` that would open the body of a control-flow construct.
        """

        text = self.text
        while self.pos < self.n:
            c = text[self.pos]
            if c in terminators:
                return
            if stop_at_newline and c in "\r\n":
                return
            if stop_at_newline and c == ";":
                self.take(SegmentKind.CODE, 1)
                return
            if stop_at_block and c in "{[":
                return
            if c in "({":
                self.group()
            elif c == "[":
                self.content_block()
            elif c in ")}]":
                self.issue(self.pos, f"unexpected closing delimiter '{c}'")
                self.take(SegmentKind.CODE, 1)
            elif c == '"':
                self.string()
            elif self.startswith("//"):
                self.line_comment()
            elif self.startswith("/*"):
                self.block_comment()
            elif c == "`":
                self.raw()
            elif c == "$":
                self.math()
            elif (m := _IDENT_RE.match(text, self.pos)) is not None:
                if m.group() in _MODULE_KEYWORDS and not self.after_dot():
                    self.module_statement(m, terminators)
                else:
                    self.take(SegmentKind.CODE, m.end() - m.start())
            else:
                m = _CODE_PLAIN_RE.match(text, self.pos)
                self.take(SegmentKind.CODE, m.end() - m.start() if m else 1)

    def after_dot(self) -> bool:
        idx = self.pos - 1
        while idx >= 0 and self.text[idx] in " \t":
            idx -= 1
        return idx >= 0 and self.text[idx] == "."

    def module_statement(
        self, keyword: re.Match[str], terminators: str, start: int | None = None
    ) -> None:
        """Scan an ``import``/``include`` statement as one untouched segment.

        ``keyword`` is the match of the ``import``/``include`` identifier.
        """

        if start is None:
            start = self.pos
        mark = len(self.parts)
        self.pos = keyword.end()
        self.code(terminators, stop_at_newline=True)
        self.collapse(mark, start, SegmentKind.MODULE)

    def postfix(self) -> None:
        """Consume call arguments, trailing content blocks and field access."""

        while self.pos < self.n:
            c = self.text[self.pos]
            if c == "(":
                self.group()
            elif c == "[":
                self.content_block()
            elif c == "." and (m := _IDENT_RE.match(self.text, self.pos + 1)):
                self.take(SegmentKind.CODE, m.end() - self.pos)
            else:
                return

    def inline_space(self) -> str:
        """Return the run of spaces and tabs at the cursor without consuming it."""

        end = self.pos
        while end < self.n and self.text[end] in " \t":
            end += 1
        return self.text[self.pos : end]

    def body(self) -> bool:
        c = self.peek()
        if c == "{":
            self.group()
        elif c == "[":
            self.content_block()
        else:
            self.issue(self.pos, "expected block")
            return False
        return True

    def control_flow(self, keyword: str, terminators: str) -> None:
        """Scan ``if``/``for``/``while`` including ``else`` branches."""

        while True:
            self.code(terminators, stop_at_newline=True, stop_at_block=True)
            if not self.body() or keyword in _LOOP_KEYWORDS:
                return
            gap = self.inline_space()
            m = _IDENT_RE.match(self.text, self.pos + len(gap))
            if not m or m.group() != "else":
                return
            self.take(SegmentKind.CODE, m.end() - self.pos)
            gap = self.inline_space()
            nested = _IDENT_RE.match(self.text, self.pos + len(gap))
            if nested and nested.group() == "if":
                self.take(SegmentKind.CODE, nested.end() - self.pos)
                continue
            self.take(SegmentKind.CODE, len(gap))
            self.body()
            return

    def embedded(self, in_block: bool) -> None:
        """Scan the code expression or statement introduced by ``#``."""

        start = self.pos
        terminators = "]" if in_block else ""
        nxt = self.peek(1)
        m = _IDENT_RE.match(self.text, self.pos + 1)
        if m is not None:
            word = m.group()
            if word in _MODULE_KEYWORDS:
                self.pos += 1
                self.module_statement(m, terminators, start)
                return
            self.take(SegmentKind.CODE, m.end() - start)
            if word in _STATEMENT_KEYWORDS:
                self.code(terminators, stop_at_newline=True)
            elif word in ("if", "for", "while"):
                self.control_flow(word, terminators)
            elif word == "context":
                self.take(SegmentKind.CODE, len(self.inline_space()))
                self.atom()
            else:
                self.postfix()
        elif nxt in "({" and nxt:
            self.take(SegmentKind.CODE, 1)
            self.group()
            self.postfix()
        elif nxt == "[":
            self.take(SegmentKind.CODE, 1)
            self.content_block()
            self.postfix()
        elif nxt == '"':
            self.take(SegmentKind.CODE, 1)
            self.string()
            self.postfix()
        elif (num := _NUMBER_RE.match(self.text, self.pos + 1)) is not None:
            self.take(SegmentKind.CODE, num.end() - start)
        else:
            self.take(SegmentKind.SYNTAX, 1)

    def atom(self) -> None:
        """Scan one atomic expression without a leading ``#``."""

        c = self.peek()
        m = _IDENT_RE.match(self.text, self.pos)
        if m is not None:
            self.take(SegmentKind.CODE, m.end() - m.start())
            self.postfix()
        elif c in "({" and c:
            self.group()
            self.postfix()
        elif c == "[":
            self.content_block()
            self.postfix()
        elif c == '"':
            self.string()
            self.postfix()


def tokenize(text: str) -> TokenizedDocument:
    """Split ``text`` into classified segments.

    The returned segments cover ``text`` without gaps or overlaps, in order.
    Syntax problems are reported on the result instead of being raised.
    """

    scanner = _Scanner(text)
    scanner.markup(in_block=False)
    segments = tuple(
        Segment(start, end, text[start:end], kind)  # type: ignore[arg-type]
        for kind, start, end in scanner.parts
    )
    log.debug("tokenized %d chars into %d segments", len(text), len(segments))
    if scanner.issues:
        log.debug("found %d syntax issues", len(scanner.issues))
    return TokenizedDocument(text=text, segments=segments, issues=tuple(scanner.issues))


__all__ = ["tokenize"]
