"""End-to-end scrambling of one document.

``tokenize -> classify -> plan -> apply -> verify``.  The CLI wraps these steps
with I/O.  Library callers can use :func:`scramble_text` directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from scrambler.config import ConfigModel
from scrambler.pseudo.generator import WordSubstituter
from scrambler.pseudo.wordlist import Hyphenator, Wordlist
from scrambler.replace.applier import apply_plan
from scrambler.replace.plan_builder import PlanEntry, build_replacement_plan
from scrambler.syntax.base import TokenizedDocument
from scrambler.syntax.classifier import ContentPolicy, classify
from scrambler.syntax.tokenizer import tokenize
from scrambler.utils.errors import DocumentSyntaxError
from scrambler.utils.logging import get_logger
from scrambler.verify.scanner import VerificationReport, scan_text

log = get_logger(__name__)

__all__ = ["ScrambleResult", "load_wordlist", "scramble_text"]


@dataclass(frozen=True, slots=True)
class ScrambleResult:
    """Output of :func:`scramble_text`."""

    text: str
    document: TokenizedDocument
    plan: list[PlanEntry]
    verification: VerificationReport


def load_wordlist(cfg: ConfigModel) -> Wordlist | None:
    """Load the wordlist named by ``cfg``.

    The language is validated even without a wordlist so that a bad code is
    reported early.
    """

    hyphenator = Hyphenator(cfg.language)
    if cfg.wordlist.path is None:
        return None
    return Wordlist.load(cfg.wordlist.path, hyphenator)


def scramble_text(
    text: str,
    cfg: ConfigModel,
    *,
    wordlist: Wordlist | None = None,
    scope: bytes | None = None,
) -> ScrambleResult:
    """Replace every prose word of the Typst source ``text``.

    Raises
    ------
    DocumentSyntaxError
        If ``text`` has syntax problems; nothing is substituted in that case.
    """

    document = tokenize(text)
    if not document.ok:
        raise DocumentSyntaxError(list(document.issues))

    policy = ContentPolicy.from_config(cfg)
    content = classify(document.segments, policy)
    log.debug("%d of %d segments are content", len(content), len(document.segments))

    substituter = WordSubstituter(cfg, text=text, wordlist=wordlist, scope=scope)
    plan = build_replacement_plan(text, content, substituter)
    scrambled, applied = apply_plan(text, plan)

    verification = scan_text(document, scrambled, policy)
    if not verification.ok:
        log.warning(
            "structure changed during substitution: %d residual problems",
            verification.residual_count,
        )
    return ScrambleResult(scrambled, document, applied, verification)
