"""Substitute generation: seeding, case preservation, wordlists."""

from .generator import Substitution, WordSubstituter
from .seed import (
    canonicalize_key,
    doc_hash,
    doc_scope,
    get_secret_bytes,
    rng_for,
    secret_present,
)
from .wordlist import Hyphenator, Wordlist

__all__ = [
    "Hyphenator",
    "Substitution",
    "WordSubstituter",
    "Wordlist",
    "canonicalize_key",
    "doc_hash",
    "doc_scope",
    "get_secret_bytes",
    "rng_for",
    "secret_present",
]
