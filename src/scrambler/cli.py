"""Typer-based command line interface for the scrambler.

The ``run`` command reads a Typst document (from a file or stdin), replaces
every prose word with a random substitute, verifies that the markup survived
and writes the result (to a file, back in place, or to stdout).

Exit codes
----------
0 success
2 usage error
3 I/O error (missing files, undecodable input, filesystem issues)
4 configuration error (bad config file, unsupported language)
5 pipeline error (syntax errors in the input, unexpected exceptions)
6 verification failure (strict mode and the structure changed)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import Optional

import typer
from pydantic import SecretStr, ValidationError

from .config import ConfigModel, load_config
from .io import read_text, write_text
from .pipeline import load_wordlist, scramble_text
from .utils.errors import ConfigError, DocumentSyntaxError, IOFormatError
from .utils.logging import configure_logging, get_logger
from .utils.textspan import describe_offset
from .verify import report as run_report

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

log = get_logger(__name__)

app = typer.Typer(
    name="scrambler",
    help="Scramble the words of Typst documents.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _apply_overrides(
    cfg: ConfigModel,
    *,
    language: str | None,
    wordlist: Path | None,
    aggressive: bool,
    consistent: bool | None,
    seed: str | None,
) -> ConfigModel:
    """Return a copy of ``cfg`` with CLI overrides applied."""

    new_cfg = cfg.model_copy(deep=True)
    if language is not None:
        new_cfg.language = language.lower()
    if wordlist is not None:
        new_cfg.wordlist.path = wordlist
    if aggressive:
        new_cfg.content.aggressive = True
    if consistent is not None:
        new_cfg.substitution.consistent = consistent
    if seed is not None:
        new_cfg.seed.secret = SecretStr(seed)
    return new_cfg


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


@app.callback()
def main() -> None:
    """Entry point for the scrambler command group."""
    pass


@app.command()
def run(  # noqa: PLR0913
    in_place: Optional[Path] = typer.Option(  # noqa: B008
        None, "--in-place", "-i", help="A file to perform in-place replacement on"
    ),
    in_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--in", "--input", help="Input file; stdin when omitted"
    ),
    out_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="Output file; stdout when omitted"
    ),
    wordlist: Optional[Path] = typer.Option(  # noqa: B008
        None, "--wordlist", "-w", help="The path to a line-separated wordlist"
    ),
    language: Optional[str] = typer.Option(  # noqa: B008
        None, "--language", "-l", help="An ISO 639-1 language code, like 'de' [default: en]"
    ),
    aggressive: bool = typer.Option(  # noqa: B008
        False,
        "--aggressive",
        "-a",
        help="Also replace elements that are more likely to change behavior, like strings",
    ),
    consistent: bool | None = typer.Option(  # noqa: B008
        None,
        "--consistent/--no-consistent",
        help="Give repeated words the same substitute",
    ),
    seed: Optional[str] = typer.Option(  # noqa: B008
        None, "--seed", help="Secret making the output reproducible"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    report_dir: Optional[Path] = typer.Option(  # noqa: B008
        None, "--report", help="Directory to write run summary and plan"
    ),
    encoding_in: str = typer.Option("utf-8-sig", help="Input file encoding"),  # noqa: B008
    encoding_out: str = typer.Option("utf-8", help="Output file encoding"),  # noqa: B008
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
    strict: bool | None = typer.Option(  # noqa: B008
        None,
        "--strict/--no-strict",
        help="Exit non-zero and write nothing when the document structure changed",
    ),
) -> dict[str, str]:
    """Scramble the prose of a Typst document."""

    configure_logging(verbose)

    if in_place is not None and (in_path is not None or out_path is not None):
        _safe_exit(2, "--in-place cannot be combined with --in or --out")

    # Load configuration
    try:
        cfg = load_config(config_path)
    except (ValidationError, Exception) as exc:  # pragma: no cover - diverse
        _safe_exit(4, str(exc).splitlines()[0])
    if verbose:
        typer.echo("Loaded config", err=True)

    cfg = _apply_overrides(
        cfg,
        language=language,
        wordlist=wordlist,
        aggressive=aggressive,
        consistent=consistent,
        seed=seed,
    )
    strict_mode = cfg.verification.fail_on_mismatch if strict is None else strict

    # Read input
    source = in_place if in_place is not None else in_path
    try:
        if source is not None:
            text = read_text(source, encoding=encoding_in)
        else:
            text = sys.stdin.read()
    except (IOFormatError, LookupError, OSError) as exc:
        _safe_exit(3, str(exc))
    if verbose:
        typer.echo(f"Read {len(text)} chars", err=True)

    # Wordlist
    try:
        with Timing() as t_words:
            words = load_wordlist(cfg)
    except ConfigError as exc:
        _safe_exit(4, str(exc))
    except OSError as exc:
        _safe_exit(3, str(exc))
    if verbose and words is not None:
        typer.echo(f"Loaded {len(words)} wordlist entries in {t_words.ms:.1f} ms", err=True)

    # Scramble
    try:
        with Timing() as t_run:
            result = scramble_text(text, cfg, wordlist=words)
    except DocumentSyntaxError as exc:
        located = ", ".join(
            f"{issue.message} at {describe_offset(text, issue.offset)}" for issue in exc.issues
        )
        _safe_exit(5, f"Syntax errors: {located}")
    except Exception as exc:  # pragma: no cover - unexpected
        msg = str(exc)
        if verbose:
            msg = f"{type(exc).__name__}: {msg}"
        _safe_exit(5, msg)
    if verbose:
        typer.echo(
            f"Replaced {len(result.plan)} words in {t_run.ms:.1f} ms "
            f"(residuals={result.verification.residual_count})",
            err=True,
        )

    if strict_mode and not result.verification.ok:
        for mismatch in result.verification.mismatches[:5]:
            log.error("structure mismatch at segment %d", mismatch.index)
        _safe_exit(6, "Document structure changed during substitution; nothing written")

    # Write output
    target = in_place if in_place is not None else out_path
    written: dict[str, str] = {}
    if target is not None:
        try:
            write_text(target, result.text, encoding=encoding_out, newline="")
        except (LookupError, UnicodeEncodeError, OSError) as exc:
            _safe_exit(3, str(exc))
        written["out"] = str(target)
        if verbose:
            typer.echo(f"Wrote {target}", err=True)
    else:
        typer.echo(result.text, nl=False)

    if report_dir is not None:
        bundle = run_report.write_report_bundle(
            report_dir,
            text_before=text,
            plan=result.plan,
            cfg=cfg,
            verification_report=result.verification,
        )
        written.update(bundle)
        if verbose:
            typer.echo(f"Report written to {report_dir}", err=True)

    return written
