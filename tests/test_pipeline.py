from __future__ import annotations

import re
from pathlib import Path

import pytest
from pydantic import SecretStr

from scrambler.config import ConfigModel, load_config
from scrambler.pipeline import load_wordlist, scramble_text
from scrambler.utils.errors import ConfigError, DocumentSyntaxError


def _cfg(*, secret: str | None = "pipeline", aggressive: bool = False) -> ConfigModel:
    cfg = load_config(env={})
    cfg.seed.secret = SecretStr(secret) if secret is not None else None
    cfg.content.aggressive = aggressive
    return cfg


def test_punctuation_and_markup_preserved() -> None:
    out = scramble_text("Hello, *world*!", _cfg()).text
    assert re.fullmatch(r"[A-Z][a-z]{4}, \*[a-z]{5}\*!", out)


def test_same_seed_same_output() -> None:
    text = "= Heading\nSome prose with several words.\n"
    assert scramble_text(text, _cfg()).text == scramble_text(text, _cfg()).text
    assert scramble_text(text, _cfg()).text != scramble_text(text, _cfg(secret="other")).text


def test_unseeded_runs_differ() -> None:
    text = "A sentence long enough to make collisions vanishingly unlikely."
    assert scramble_text(text, _cfg(secret=None)).text != scramble_text(text, _cfg(secret=None)).text


def test_numbers_keep_length() -> None:
    out = scramble_text("In 2024 we", _cfg()).text
    assert re.fullmatch(r"[A-Z][a-z] \d{4} [a-z]{2}", out)


def test_strings_kept_unless_aggressive() -> None:
    text = '#let s = "keep me"\nchange me'
    out = scramble_text(text, _cfg()).text
    assert out.startswith('#let s = "keep me"\n')
    assert not out.endswith("change me")
    aggressive = scramble_text(text, _cfg(aggressive=True)).text
    assert "keep me" not in aggressive
    assert aggressive.startswith('#let s = "')


def test_raw_kept_unless_aggressive() -> None:
    text = "`let x` and ```py\nprint(1)\n```"
    out = scramble_text(text, _cfg()).text
    assert out.startswith("`let x` ")
    assert out.endswith("```py\nprint(1)\n```")
    aggressive = scramble_text(text, _cfg(aggressive=True)).text
    assert "let x" not in aggressive
    assert aggressive.startswith("`")
    assert "```py\n" in aggressive


def test_math_and_imports_untouched() -> None:
    text = '#import "lib.typ": item\nSee $alpha + beta$ here.'
    out = scramble_text(text, _cfg(aggressive=True)).text
    assert out.startswith('#import "lib.typ": item\n')
    assert "$alpha + beta$" in out


def test_link_scheme_kept() -> None:
    out = scramble_text("see https://example.com/page", _cfg()).text
    assert re.fullmatch(r"[a-z]{3} https://[a-z]{7}\.[a-z]{3}/[a-z]{4}", out)


def test_comments_scrambled() -> None:
    out = scramble_text("x // secret note\n", _cfg()).text
    assert "secret" not in out
    assert re.fullmatch(r"[a-z] // [a-z]{6} [a-z]{4}\n", out)


def test_syntax_errors_raise() -> None:
    with pytest.raises(DocumentSyntaxError) as excinfo:
        scramble_text("text $unclosed", _cfg())
    assert excinfo.value.issues[0].offset == 5
    assert str(excinfo.value).startswith("Syntax errors:")


def test_result_is_verified() -> None:
    result = scramble_text("#set text(lang: \"en\")\nPlain words [and more].", _cfg())
    assert result.verification.ok
    assert len(result.plan) == 4


def test_load_wordlist(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("alpha\nbeta\n", encoding="utf-8")
    cfg = _cfg()
    assert load_wordlist(cfg) is None
    cfg.wordlist.path = path
    wordlist = load_wordlist(cfg)
    assert wordlist is not None
    assert len(wordlist) == 2


def test_load_wordlist_rejects_unsupported_language() -> None:
    cfg = _cfg()
    cfg.language = "zz"
    with pytest.raises(ConfigError):
        load_wordlist(cfg)


def test_method_names_after_strings_untouched() -> None:
    out = scramble_text('#"abc".len() words\n', _cfg()).text
    assert re.fullmatch(r'#"abc"\.len\(\) [a-z]{5}\n', out)
