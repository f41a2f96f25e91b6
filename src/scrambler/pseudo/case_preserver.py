"""Keep the shape of the source word on its substitute.

The helpers are pure; any randomness is supplied by the caller through a
:class:`random.Random`.
"""

from __future__ import annotations

import random
import string
from typing import List

from scrambler.utils.textspan import detect_text_case

DIGITS = string.digits
LETTERS = string.ascii_lowercase


def match_case(source: str, replacement: str) -> str:
    """Return ``replacement`` with casing adapted from ``source``.

    Uniformly ``UPPER``/``LOWER``/``TITLE`` sources apply that casing to the
    whole replacement.  Otherwise each letter of ``replacement`` copies the
    case of the corresponding letter in ``source``, cycling the source pattern
    when the replacement is longer.
    """

    case = detect_text_case(source)
    if case == "UPPER":
        return replacement.upper()
    if case == "LOWER":
        return replacement.lower()
    if case == "TITLE":
        return replacement.title()

    source_letters = [ch for ch in source if ch.isalpha()]
    if not source_letters:
        return replacement

    result: List[str] = []
    idx = 0
    for ch in replacement:
        if ch.isalpha():
            src_ch = source_letters[idx % len(source_letters)]
            idx += 1
            result.append(ch.upper() if src_ch.isupper() else ch.lower())
        else:
            result.append(ch)
    return "".join(result)


def random_like(source: str, rng: random.Random) -> str:
    """Return random characters with the same length and shape as ``source``.

    Digits map to digits.  Upper- and lowercase letters map to ASCII letters of
    the same case.  Every other character (uncased scripts included) becomes a
    lowercase ASCII letter.  Exactly one draw is made per character so a given
    RNG state yields the same letters whatever the casing of ``source``.
    """

    out: List[str] = []
    for ch in source:
        if ch.isdecimal():
            out.append(rng.choice(DIGITS))
            continue
        letter = rng.choice(LETTERS)
        out.append(letter.upper() if ch.isupper() else letter)
    return "".join(out)


def random_digits(source: str, rng: random.Random) -> str:
    """Return a random digit string as long as ``source``."""

    return "".join(rng.choice(DIGITS) for _ in source)


__all__ = ["match_case", "random_like", "random_digits"]
