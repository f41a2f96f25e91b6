"""Word substitution.

:class:`WordSubstituter` turns one prose word into its replacement.  Purely
numeric words become random digits of the same length.  Other words are drawn
from the wordlist when one is loaded and a large enough bucket matches, and
otherwise become random letters shaped like the source.

In consistent mode every distinct word (compared case-insensitively) draws
from its own RNG derived from the word and the document scope, so repeated
words get the same substitute.  Otherwise all words share one document-level
stream.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from scrambler.config import ConfigModel

from .case_preserver import match_case, random_digits, random_like
from .seed import canonicalize_key, doc_scope, rng_for
from .wordlist import Wordlist

# Regular draws per word before falling back to random characters only.
_MAX_ATTEMPTS = 3


@dataclass(slots=True, frozen=True)
class Substitution:
    """A replacement word and the strategy that produced it."""

    text: str
    strategy: str


class WordSubstituter:
    """Produce substitutes for prose words."""

    def __init__(
        self,
        cfg: ConfigModel,
        *,
        text: str = "",
        wordlist: Wordlist | None = None,
        scope: bytes | None = None,
    ) -> None:
        """Initialize the substituter.

        Parameters
        ----------
        cfg:
            Configuration providing substitution settings and the seed secret.
        text:
            Document text, used to derive the scope when a secret is set.
        wordlist:
            Optional wordlist for realistic substitutes.
        scope:
            Optional precomputed scope digest, see
            :func:`scrambler.pseudo.seed.doc_scope`.
        """

        if scope is None:
            scope = doc_scope(cfg, text=text)
        self.cfg = cfg
        self.scope = scope
        self.wordlist = wordlist
        self.minimum = cfg.substitution.min_bucket_size
        self.preserve_case = cfg.substitution.preserve_case
        self.consistent = cfg.substitution.consistent
        self._stream = rng_for("DOC", "", scope=scope)

    def rng(self, word: str) -> random.Random:
        """Return the RNG to draw the substitute for ``word`` from."""

        if self.consistent:
            return rng_for("WORD", word, scope=self.scope)
        return self._stream

    def substitute(self, word: str) -> Substitution:
        """Return a substitute for the alphanumeric run ``word``."""

        if not word:
            raise ValueError("cannot substitute an empty word")
        rng = self.rng(word)
        original = canonicalize_key(word)
        for _ in range(_MAX_ATTEMPTS):
            candidate = self._draw(word, rng)
            if canonicalize_key(candidate.text) != original:
                return candidate
        # Only random characters from here on; the wordlist may hold nothing else.
        while True:
            candidate = self._random(word, rng)
            if canonicalize_key(candidate.text) != original:
                return candidate

    def _random(self, word: str, rng: random.Random) -> Substitution:
        if all(ch.isnumeric() for ch in word):
            return Substitution(random_digits(word, rng), "digits")
        return Substitution(random_like(word, rng), "garbage")

    def _draw(self, word: str, rng: random.Random) -> Substitution:
        if self.wordlist is not None and not all(ch.isnumeric() for ch in word):
            picked = self.wordlist.choose(word, rng, minimum=self.minimum)
            if picked is not None:
                entry, strategy = picked
                if self.preserve_case:
                    entry = match_case(word, entry)
                return Substitution(entry, strategy)
        return self._random(word, rng)


__all__ = ["Substitution", "WordSubstituter"]
