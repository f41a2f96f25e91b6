"""Wordlist indexing for realistic substitutes.

A wordlist is a plain file with one entry per line.  Entries are bucketed twice:
by character count and by syllable pattern, where the pattern is the tuple of
syllable lengths produced by hyphenating the entry with :mod:`pyphen` for the
selected language.  A word is replaced from the syllable bucket first and the
length bucket second.  A bucket is only used when it holds at least
``minimum`` entries, which keeps replacements varied.

Only entries made of a single alphanumeric run are kept.  Anything else
(spaces, apostrophes, markup characters) could change the structure of the
document it is inserted into.
"""

from __future__ import annotations

import os
import random
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

import pyphen

from scrambler.utils.errors import ConfigError
from scrambler.utils.logging import get_logger

log = get_logger(__name__)

Pattern = tuple[int, ...]


class Hyphenator:
    """Syllable patterns for one ISO 639-1 language."""

    def __init__(self, language: str) -> None:
        if len(language) != 2 or not language.isascii() or not language.isalpha():
            raise ConfigError(f"Language is not two ascii letters long: {language!r}")
        resolved = pyphen.language_fallback(language.lower())
        if resolved is None:
            raise ConfigError(f"Language not supported: {language!r}")
        self.language = language.lower()
        self.dictionary = resolved
        self._pyphen = pyphen.Pyphen(lang=resolved)

    def pattern(self, word: str) -> Pattern:
        """Return the syllable lengths of ``word``, e.g. ``(3, 2)`` for ``hap-py``."""

        bounds = [0, *self._pyphen.positions(word), len(word)]
        return tuple(b - a for a, b in zip(bounds, bounds[1:], strict=False))


class Wordlist:
    """Wordlist entries bucketed by length and by syllable pattern."""

    def __init__(self, words: Iterable[str], hyphenator: Hyphenator) -> None:
        self.hyphenator = hyphenator
        self.by_length: dict[int, list[str]] = defaultdict(list)
        self.by_pattern: dict[Pattern, list[str]] = defaultdict(list)
        self.skipped = 0
        count = 0
        for word in words:
            if not word:
                continue
            if not word.isalnum():
                self.skipped += 1
                continue
            self.by_length[len(word)].append(word)
            self.by_pattern[hyphenator.pattern(word)].append(word)
            count += 1
        self.size = count

    @classmethod
    def load(cls, path: str | os.PathLike[str], hyphenator: Hyphenator) -> Wordlist:
        """Read a line-separated wordlist from ``path``."""

        with Path(path).open("r", encoding="utf-8-sig") as f:
            wordlist = cls((line.rstrip() for line in f), hyphenator)
        log.debug(
            "loaded %d wordlist entries from %s (%d skipped)",
            wordlist.size,
            path,
            wordlist.skipped,
        )
        return wordlist

    def __len__(self) -> int:
        return self.size

    def choose(
        self, word: str, rng: random.Random, *, minimum: int
    ) -> tuple[str, str] | None:
        """Return ``(entry, strategy)`` for ``word`` or ``None``.

        ``strategy`` is ``"syllables"`` or ``"length"`` depending on which
        bucket supplied the entry.
        """

        bucket = self.by_pattern.get(self.hyphenator.pattern(word))
        if bucket and len(bucket) >= minimum:
            return rng.choice(bucket), "syllables"
        bucket = self.by_length.get(len(word))
        if bucket and len(bucket) >= minimum:
            return rng.choice(bucket), "length"
        return None


__all__ = ["Hyphenator", "Wordlist", "Pattern"]
