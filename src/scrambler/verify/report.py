"""Run report bundle.

``summary.json`` records what a run did: replacement counts by strategy and by
segment kind, the total length change, a hash of the input and the
verification result.  ``plan.json`` lists the applied replacements by offset.
Neither file contains any of the original words, so a report can be shared
alongside the scrambled document.
"""

from __future__ import annotations

import base64
import json
from collections import Counter
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from scrambler.config import ConfigModel
from scrambler.pseudo.seed import doc_hash, secret_present
from scrambler.replace.plan_builder import PlanEntry

from .scanner import VerificationReport

__all__ = ["RunSummary", "summarize_run", "write_report_bundle"]


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Aggregate information about one scrambling run."""

    total_replacements: int
    counts_by_strategy: dict[str, int]
    counts_by_kind: dict[str, int]
    length_delta_total: int
    language: str
    aggressive: bool
    consistent: bool
    seed_present: bool
    doc_hash_b32: str
    generated_at: str


def summarize_run(text_before: str, plan: list[PlanEntry], *, cfg: ConfigModel) -> RunSummary:
    """Return the :class:`RunSummary` for ``plan`` applied to ``text_before``."""

    by_strategy = Counter(p.strategy for p in plan)
    by_kind = Counter(p.kind.value for p in plan)
    delta = sum(len(p.replacement) - (p.end - p.start) for p in plan)
    digest = doc_hash(text_before)
    return RunSummary(
        total_replacements=len(plan),
        counts_by_strategy=dict(sorted(by_strategy.items())),
        counts_by_kind=dict(sorted(by_kind.items())),
        length_delta_total=delta,
        language=cfg.language,
        aggressive=cfg.content.aggressive,
        consistent=cfg.substitution.consistent,
        seed_present=secret_present(cfg),
        doc_hash_b32=base64.b32encode(digest).decode("ascii").lower().rstrip("="),
        generated_at=datetime.now(timezone.utc).isoformat(),
    )


def write_report_bundle(
    report_dir: str | Path,
    *,
    text_before: str,
    plan: list[PlanEntry],
    cfg: ConfigModel,
    verification_report: VerificationReport | None = None,
) -> dict[str, str]:
    """Write report artifacts to ``report_dir`` and return written paths."""

    report_path = Path(report_dir)
    report_path.mkdir(parents=True, exist_ok=True)
    written: dict[str, str] = {}

    summary_data: dict[str, object] = {"summary": asdict(summarize_run(text_before, plan, cfg=cfg))}
    if verification_report is not None:
        summary_data["verification"] = {
            "ok": verification_report.ok,
            "residual_count": verification_report.residual_count,
            "syntax_segments": verification_report.syntax_segments,
            "issues": [str(issue) for issue in verification_report.issues],
            "mismatches": [asdict(m) for m in verification_report.mismatches],
        }
    summary_path = report_path / "summary.json"
    with summary_path.open("w", encoding="utf-8") as f:
        json.dump(summary_data, f, ensure_ascii=False, indent=2)
    written["summary.json"] = str(summary_path)

    plan_min = [
        {
            "start": p.start,
            "end": p.end,
            "kind": p.kind.value,
            "strategy": p.strategy,
            "replacement": p.replacement,
        }
        for p in plan
    ]
    plan_path = report_path / "plan.json"
    with plan_path.open("w", encoding="utf-8") as f:
        json.dump(plan_min, f, ensure_ascii=False, indent=2)
    written["plan.json"] = str(plan_path)

    return written
