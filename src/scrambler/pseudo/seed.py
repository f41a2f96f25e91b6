"""Seeding helpers for reproducible substitution.

Without a secret every run draws from system entropy, so two runs over the
same document produce unrelated output.  With a secret (``--seed`` or the
environment variable named by ``seed.secret_env``) the document scope is
derived with HMAC-SHA256 from the secret and the document hash, which makes
the whole run reproducible.  Word keys are canonicalized so that case or
Unicode composition differences do not split a word into several streams.

Secrets and derived digests are never logged.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import random
import unicodedata
from typing import Final

from scrambler.config import ConfigModel

# ---------------------------------------------------------------------------
# Domain separation constants
# ---------------------------------------------------------------------------

_NS_DOC: Final = b"scrambler/v1/doc-seed"
_NS_RNG: Final = b"scrambler/v1/rng"


def canonicalize_key(key: str) -> str:
    """Normalize a word key: strip, NFC normalize and lowercase."""

    return unicodedata.normalize("NFC", key.strip()).lower()


def doc_hash(text: str) -> bytes:
    """Return a 32-byte BLAKE2b digest of the raw document text."""

    return hashlib.blake2b(text.encode("utf-8"), digest_size=32).digest()


def get_secret_bytes(cfg: ConfigModel) -> bytes:
    """Return the seed secret as bytes, or ``b""`` when none is configured."""

    secret = cfg.seed.secret
    if secret is None:
        return b""
    return secret.get_secret_value().encode("utf-8")


def secret_present(cfg: ConfigModel) -> bool:
    """Return ``True`` if a non-empty seed secret is configured."""

    return bool(get_secret_bytes(cfg))


def doc_scope(cfg: ConfigModel, *, text: str) -> bytes:
    """Derive the scope digest for one run over ``text``.

    With a secret: ``HMAC(secret, _NS_DOC || doc_hash(text))``.  Without one,
    32 random bytes, so the scope differs on every run.
    """

    secret = get_secret_bytes(cfg)
    if not secret:
        return os.urandom(32)
    return hmac.new(secret, _NS_DOC + doc_hash(text), hashlib.sha256).digest()


def rng_for(kind: str, key: str, *, scope: bytes) -> random.Random:
    """Derive a reproducible RNG for ``key`` of ``kind`` within ``scope``."""

    canonical = canonicalize_key(key)
    data = _NS_RNG + kind.encode("utf-8") + scope + canonical.encode("utf-8")
    digest = hashlib.sha256(data).digest()
    return random.Random(int.from_bytes(digest, "big"))


__all__ = [
    "canonicalize_key",
    "doc_hash",
    "get_secret_bytes",
    "secret_present",
    "doc_scope",
    "rng_for",
]
