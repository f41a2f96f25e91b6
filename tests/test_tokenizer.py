"""Tests for the Typst structural tokenizer."""

from __future__ import annotations

import pytest

from scrambler.syntax import SegmentKind, tokenize

K = SegmentKind

SAMPLE = """\
#import "template.typ": conf
#show: conf.with(title: [A *bold* plan])
#set text(lang: "en")

= Introduction <intro>
Prose with _emphasis_, a link https://example.com/docs and @intro.
// a line comment
/* a /* nested */ block */
#let name = "Ann"
Inline `raw` and
```python
print("hi")
```
$ sum_(i=1)^n i $ and \\# escaped.
#if true [yes] else [no]
#for x in (1, 2) { x }
"""


def _pairs(text: str) -> list[tuple[SegmentKind, str]]:
    return [(seg.kind, seg.text) for seg in tokenize(text).segments]


def test_segments_cover_text_exactly() -> None:
    doc = tokenize(SAMPLE)
    assert doc.ok, doc.issues
    assert "".join(seg.text for seg in doc.segments) == SAMPLE
    pos = 0
    for seg in doc.segments:
        assert seg.start == pos
        pos = seg.end
    assert pos == len(SAMPLE)


def test_plain_markup_is_one_text_segment() -> None:
    text = "= Hello World\nSome *bold* text."
    assert _pairs(text) == [(K.TEXT, text)]


def test_embedded_calls_and_content_blocks() -> None:
    assert _pairs('Hi #emph[there] and #strong("x").') == [
        (K.TEXT, "Hi "),
        (K.CODE, "#emph"),
        (K.SYNTAX, "["),
        (K.TEXT, "there"),
        (K.SYNTAX, "]"),
        (K.TEXT, " and "),
        (K.CODE, "#strong("),
        (K.SYNTAX, '"'),
        (K.STRING, "x"),
        (K.SYNTAX, '"'),
        (K.CODE, ")"),
        (K.TEXT, "."),
    ]


def test_field_access_stops_at_sentence_period() -> None:
    assert _pairs("See #doc.title. Next") == [
        (K.TEXT, "See "),
        (K.CODE, "#doc.title"),
        (K.TEXT, ". Next"),
    ]


def test_comments() -> None:
    assert _pairs("a // note here\nb /* block */ c") == [
        (K.TEXT, "a "),
        (K.SYNTAX, "//"),
        (K.COMMENT, " note here"),
        (K.TEXT, "\nb "),
        (K.SYNTAX, "/*"),
        (K.COMMENT, " block "),
        (K.SYNTAX, "*/"),
        (K.TEXT, " c"),
    ]


def test_block_comments_nest() -> None:
    assert _pairs("/* a /* b */ c */d") == [
        (K.SYNTAX, "/*"),
        (K.COMMENT, " a /* b */ c "),
        (K.SYNTAX, "*/"),
        (K.TEXT, "d"),
    ]


def test_raw_with_language_tag() -> None:
    assert _pairs("```py\nprint('hi')\n```") == [
        (K.SYNTAX, "```py"),
        (K.RAW, "\nprint('hi')\n"),
        (K.SYNTAX, "```"),
    ]


def test_inline_and_empty_raw() -> None:
    assert _pairs("`x y` and ``") == [
        (K.SYNTAX, "`"),
        (K.RAW, "x y"),
        (K.SYNTAX, "`"),
        (K.TEXT, " and "),
        (K.SYNTAX, "``"),
    ]


def test_math_is_kept_whole() -> None:
    assert _pairs('$x + "a $ b"$ is') == [
        (K.MATH, '$x + "a $ b"$'),
        (K.TEXT, " is"),
    ]


def test_link_scheme_is_syntax_and_trailing_period_is_text() -> None:
    assert _pairs("see https://example.com/path.") == [
        (K.TEXT, "see "),
        (K.SYNTAX, "https://"),
        (K.LINK, "example.com/path"),
        (K.TEXT, "."),
    ]


def test_link_keeps_balanced_parentheses() -> None:
    assert _pairs("(https://x.org/a_(b))") == [
        (K.TEXT, "("),
        (K.SYNTAX, "https://"),
        (K.LINK, "x.org/a_(b)"),
        (K.TEXT, ")"),
    ]


def test_labels_and_references() -> None:
    assert _pairs("= Intro <intro>\nSee @intro.") == [
        (K.TEXT, "= Intro "),
        (K.SYNTAX, "<intro>"),
        (K.TEXT, "\nSee "),
        (K.SYNTAX, "@intro"),
        (K.TEXT, "."),
    ]


def test_less_than_without_label_is_text() -> None:
    assert _pairs("a < b") == [(K.TEXT, "a < b")]


def test_escapes() -> None:
    assert _pairs("\\#not code \\u{1F600}!") == [
        (K.SYNTAX, "\\#"),
        (K.TEXT, "not code "),
        (K.SYNTAX, "\\u{1F600}"),
        (K.TEXT, "!"),
    ]


def test_string_escapes_are_syntax() -> None:
    assert _pairs('#("a\\nb")') == [
        (K.CODE, "#("),
        (K.SYNTAX, '"'),
        (K.STRING, "a"),
        (K.SYNTAX, "\\n"),
        (K.STRING, "b"),
        (K.SYNTAX, '"'),
        (K.CODE, ")"),
    ]


def test_import_statement_is_one_module_segment() -> None:
    assert _pairs('#import "@preview/x:0.1.0": foo\nText') == [
        (K.MODULE, '#import "@preview/x:0.1.0": foo'),
        (K.TEXT, "\nText"),
    ]


def test_import_inside_code_block() -> None:
    pairs = _pairs('#{\n  include "chapter.typ"\n}')
    assert (K.MODULE, 'include "chapter.typ"') in pairs
    assert all(kind is not K.STRING for kind, _ in pairs)


def test_let_statement_ends_at_newline() -> None:
    assert _pairs('#let name = "Ann"\nHello') == [
        (K.CODE, "#let name = "),
        (K.SYNTAX, '"'),
        (K.STRING, "Ann"),
        (K.SYNTAX, '"'),
        (K.TEXT, "\nHello"),
    ]


def test_let_with_content_block_and_semicolon() -> None:
    assert _pairs("#let t = [Big words]; after") == [
        (K.CODE, "#let t = "),
        (K.SYNTAX, "["),
        (K.TEXT, "Big words"),
        (K.SYNTAX, "]"),
        (K.CODE, ";"),
        (K.TEXT, " after"),
    ]


def test_if_else_branches() -> None:
    assert _pairs("#if x [yes] else [no] done") == [
        (K.CODE, "#if x "),
        (K.SYNTAX, "["),
        (K.TEXT, "yes"),
        (K.SYNTAX, "]"),
        (K.CODE, " else "),
        (K.SYNTAX, "["),
        (K.TEXT, "no"),
        (K.SYNTAX, "]"),
        (K.TEXT, " done"),
    ]


def test_else_if_chain() -> None:
    pairs = _pairs("#if a [one] else if b [two] else [three]")
    texts = [text for kind, text in pairs if kind is K.TEXT]
    assert texts == ["one", "two", "three"]


def test_for_loop_body() -> None:
    assert _pairs("#for x in (1, 2) [item ] end") == [
        (K.CODE, "#for x in (1, 2) "),
        (K.SYNTAX, "["),
        (K.TEXT, "item "),
        (K.SYNTAX, "]"),
        (K.TEXT, " end"),
    ]


def test_context_expression() -> None:
    assert _pairs("#context text.lang is set") == [
        (K.CODE, "#context text.lang"),
        (K.TEXT, " is set"),
    ]


def test_markup_brackets_nest_inside_content_blocks() -> None:
    assert _pairs("#box[a [b] c]") == [
        (K.CODE, "#box"),
        (K.SYNTAX, "["),
        (K.TEXT, "a [b] c"),
        (K.SYNTAX, "]"),
    ]


def test_hash_without_expression_is_syntax() -> None:
    assert _pairs("C# rocks") == [
        (K.TEXT, "C"),
        (K.SYNTAX, "#"),
        (K.TEXT, " rocks"),
    ]


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("`unclosed", "unclosed raw text"),
        ("$x + y", "unclosed equation"),
        ("oops ]", "unexpected closing bracket"),
        ("#f(a", "unclosed delimiter, expected ')'"),
        ("/* open", "unclosed block comment"),
        ('#"abc', "unclosed string"),
        ("#box[abc", "unclosed content block"),
        ("text */", "unexpected end of block comment"),
    ],
)
def test_syntax_issues(text: str, message: str) -> None:
    doc = tokenize(text)
    assert not doc.ok
    assert message in [issue.message for issue in doc.issues]
    assert "".join(seg.text for seg in doc.segments) == text


def test_issue_offsets() -> None:
    doc = tokenize("ok\n$x")
    assert doc.issues[0].offset == 3
    assert str(doc.issues[0]) == "unclosed equation at offset 3"


def test_empty_document() -> None:
    doc = tokenize("")
    assert doc.ok
    assert doc.segments == ()


def test_method_call_on_string_is_code() -> None:
    assert _pairs('#"abc".len() words\n') == [
        (K.CODE, "#"),
        (K.SYNTAX, '"'),
        (K.STRING, "abc"),
        (K.SYNTAX, '"'),
        (K.CODE, ".len()"),
        (K.TEXT, " words\n"),
    ]


def test_field_access_on_content_block_is_code() -> None:
    assert _pairs("#[some text].func() more") == [
        (K.CODE, "#"),
        (K.SYNTAX, "["),
        (K.TEXT, "some text"),
        (K.SYNTAX, "]"),
        (K.CODE, ".func()"),
        (K.TEXT, " more"),
    ]


def test_dollar_inside_math_comments() -> None:
    doc = tokenize("$ a /* $ */ b $\n")
    assert doc.ok, doc.issues
    assert _pairs("$ a /* $ */ b $\n") == [(K.MATH, "$ a /* $ */ b $"), (K.TEXT, "\n")]
    assert _pairs("$x // $ note\ny$ z") == [(K.MATH, "$x // $ note\ny$"), (K.TEXT, " z")]


def test_unclosed_comment_in_math_is_unclosed_equation() -> None:
    doc = tokenize("$ a /* b $")
    assert [issue.message for issue in doc.issues] == ["unclosed equation"]
