"""
ASCII terminal formatters for the ``deepdive analyze`` command.

All formatters accept model objects and return plain multi-line strings
suitable for ``typer.echo()``. No third-party dependencies (no ``rich``).

Example output::

    === DeepDive Report ===
      Query:          acme corp
      Results:        3
      Average score:  +0
      Sentiment:      1 positive | 1 negative | 1 neutral
      Verdict:        Neutral - Balanced positive and negative signals

      Rank  Score  Sentiment  Title
      --------------------------------------------------------------
         1   +100   positive  Revolutionary AI Breakthrough Achieves...
"""

from __future__ import annotations

from collections.abc import Sequence

from deepdive.models.report import Report, SignalCount
from deepdive.models.result import ScoredResult
from deepdive.signals.lexicon import SignalLexicon
from deepdive.taxonomy.signal_taxonomy import Polarity, Tier

_TITLE_WIDTH = 48


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def format_signal_counts(counts: Sequence[SignalCount]) -> str:
    """Render ``[term x2, term x1]`` style text, or ``(none)``."""
    if not counts:
        return "(none)"
    return ", ".join(f"{c.term} x{c.count}" for c in counts)


# ── Report summary ────────────────────────────────────────────────────────────


def format_report_summary(report: Report, query: str = "") -> str:
    """Format the batch summary block.

    Args:
        report: Output of ``build_report()``.
        query:  Optional query string (header only).

    Returns:
        Multi-line string.
    """
    summary = report.summary
    dist = summary.sentiment_distribution

    lines: list[str] = []
    lines.append("")
    lines.append("=== DeepDive Report ===")
    if query:
        lines.append(f"  Query:          {query}")
    lines.append(f"  Results:        {summary.total_results}")

    if report.is_empty:
        lines.append(f"  Verdict:        {report.recommendation}")
        return "\n".join(lines)

    lines.append(f"  Average score:  {summary.average_score:+d}")
    lines.append(
        f"  Sentiment:      {dist.positive} positive | "
        f"{dist.negative} negative | {dist.neutral} neutral"
    )
    lines.append(f"  Verdict:        {report.recommendation}")
    lines.append("")
    lines.append(f"  Top positive:   {format_signal_counts(report.top_signals.positive)}")
    lines.append(f"  Top negative:   {format_signal_counts(report.top_signals.negative)}")
    return "\n".join(lines)


# ── Ranked results ────────────────────────────────────────────────────────────


def format_results_table(results: Sequence[ScoredResult], show_signals: bool = False) -> str:
    """Format ranked results as an ASCII table, one row per record.

    Args:
        results:      Ranked results (rank = position + 1).
        show_signals: Append a ``+ ...`` / ``- ...`` line per record listing
                      the matched terms.

    Returns:
        Multi-line string; a placeholder line when ``results`` is empty.
    """
    if not results:
        return "\n  (no results)"

    lines: list[str] = [""]
    header = f"  {'Rank':>4}  {'Score':>5}  {'Sentiment':>9}  {'Title':<{_TITLE_WIDTH}}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, result in enumerate(results, start=1):
        analysis = result.analysis
        lines.append(
            f"  {rank:>4}  {analysis.score:>+5d}  {analysis.sentiment.value:>9}  "
            f"{_truncate(result.title, _TITLE_WIDTH):<{_TITLE_WIDTH}}"
        )
        if show_signals:
            if analysis.positive_signals:
                lines.append(f"{'':>20}+ {', '.join(analysis.positive_signals)}")
            if analysis.negative_signals:
                lines.append(f"{'':>20}- {', '.join(analysis.negative_signals)}")

    return "\n".join(lines)


# ── Lexicon listing ───────────────────────────────────────────────────────────


def format_lexicon(lexicon: SignalLexicon) -> str:
    """List lexicon terms grouped by polarity and tier, with weights."""
    lines: list[str] = [f"Lexicon '{lexicon.version}' ({len(lexicon)} terms)"]
    for polarity in Polarity:
        for tier in Tier:
            terms = lexicon.terms(polarity, tier)
            weight = SignalLexicon.weight(polarity, tier)
            lines.append("")
            lines.append(f"  [{polarity.upper()} / {tier.upper()}]  weight={weight}  ({len(terms)})")
            lines.append("    " + (", ".join(terms) if terms else "(none)"))
    return "\n".join(lines)
