"""Replacement plan applier.

Plan entries reference half-open character ranges ``[start, end)`` in the
original text.  Replacements are applied from right to left so earlier spans
are unaffected by later edits, using a chunked builder.
"""

from __future__ import annotations

from dataclasses import replace

from scrambler.utils.errors import OverlapError, SpanOutOfBoundsError

from .plan_builder import PlanEntry

__all__ = ["apply_plan"]


def _validate_and_sort(plan: list[PlanEntry], *, text_len: int) -> list[PlanEntry]:
    """Return ``plan`` sorted by ``(start, end)`` after validating spans.

    The caller's ``plan`` is not mutated.
    """

    ordered = sorted(plan, key=lambda p: (p.start, p.end))
    prev_end = 0
    for entry in ordered:
        if not isinstance(entry.start, int) or not isinstance(entry.end, int):
            raise TypeError("plan indices must be integers")
        if not (0 <= entry.start <= entry.end <= text_len):
            msg = f"plan entry out of bounds: {entry.start}-{entry.end}"
            raise SpanOutOfBoundsError(msg)
        if prev_end > entry.start:
            msg = f"plan entries overlap: {prev_end} > {entry.start}"
            raise OverlapError(msg)
        prev_end = entry.end
    return ordered


def apply_plan(text: str, plan: list[PlanEntry]) -> tuple[str, list[PlanEntry]]:
    """Apply ``plan`` to ``text``.

    Returns ``(new_text, applied_plan)``.  The applied plan is sorted by
    position and each entry carries ``meta["applied_index"]`` (1-based) and
    ``meta["delta"]``, the change in length it caused.
    """

    if not plan:
        return text, []

    sorted_plan = _validate_and_sort(plan, text_len=len(text))

    last = len(text)
    parts: list[str] = []
    for entry in reversed(sorted_plan):
        repl = entry.replacement
        if not isinstance(repl, str):
            raise TypeError("replacement must be a string")
        parts.append(text[entry.end : last])
        parts.append(repl)
        last = entry.start
    parts.append(text[:last])
    new_text = "".join(reversed(parts))

    applied_plan: list[PlanEntry] = []
    for idx, entry in enumerate(sorted_plan, 1):
        meta = dict(entry.meta)
        meta["applied_index"] = idx
        meta["delta"] = len(entry.replacement) - (entry.end - entry.start)
        applied_plan.append(replace(entry, meta=meta))

    return new_text, applied_plan
