"""
Entry points used by collaborators (CLI, web handlers, notebooks).

    score_and_rank(raw_results)           -> list[ScoredResult]
    build_report(scored)                  -> Report
    build_response(query, raw_results)    -> DeepDiveResponse
    error_response(message)               -> DeepDiveResponse

``score_and_rank`` accepts ``RawResult`` objects or plain provider dicts; dicts
are validated into ``RawResult`` first (extra provider keys are dropped).
Everything downstream of that validation is pure.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Union

from deepdive.models.report import Report
from deepdive.models.response import DeepDiveResponse
from deepdive.models.result import RawResult, ScoredResult
from deepdive.signals.aggregator import DEFAULT_TOP_N, aggregate_report
from deepdive.signals.lexicon import DEFAULT_LEXICON, SignalLexicon
from deepdive.signals.ranker import rank_results, score_results

logger = logging.getLogger(__name__)

RawInput = Union[RawResult, Mapping[str, Any]]


def _coerce_raw(raw_results: Sequence[RawInput]) -> list[RawResult]:
    return [
        r if isinstance(r, RawResult) else RawResult.model_validate(r)
        for r in raw_results
    ]


def score_and_rank(
    raw_results: Sequence[RawInput],
    lexicon: SignalLexicon | None = None,
    captured_at: datetime | None = None,
    max_workers: int = 1,
) -> list[ScoredResult]:
    """Analyse every record, then order the batch by score (stable).

    Args:
        raw_results: ``RawResult`` objects or provider dicts.
        lexicon:     Vocabulary; ``None`` uses ``DEFAULT_LEXICON``.
        captured_at: Capture timestamp for the batch; defaults to now (UTC).
        max_workers: Per-record analysis parallelism.

    Returns:
        Ranked ``ScoredResult`` list.

    Raises:
        pydantic.ValidationError: If a dict record lacks ``title`` or ``url``.
    """
    records = _coerce_raw(raw_results)
    scored = score_results(
        records,
        lexicon=lexicon if lexicon is not None else DEFAULT_LEXICON,
        captured_at=captured_at,
        max_workers=max_workers,
    )
    return rank_results(scored)


def build_report(scored: Sequence[ScoredResult], top_n: int = DEFAULT_TOP_N) -> Report:
    """Aggregate a scored (normally ranked) batch into a ``Report``."""
    return aggregate_report(scored, top_n=top_n)


def build_response(
    query: str,
    raw_results: Sequence[RawInput],
    lexicon: SignalLexicon | None = None,
    top_n: int = DEFAULT_TOP_N,
    captured_at: datetime | None = None,
    max_workers: int = 1,
) -> DeepDiveResponse:
    """Run the full scoring pipeline and wrap it in the response envelope.

    An empty ``raw_results`` is a success with no results and the zero report.
    """
    ranked = score_and_rank(
        raw_results,
        lexicon=lexicon,
        captured_at=captured_at,
        max_workers=max_workers,
    )
    report = build_report(ranked, top_n=top_n)

    logger.info(
        "query=%r results=%d avg_score=%d recommendation=%r",
        query,
        report.summary.total_results,
        report.summary.average_score,
        report.recommendation,
    )

    return DeepDiveResponse(
        success=True,
        results=ranked,
        report=report,
        query=query,
        count=len(ranked),
    )


def error_response(message: str) -> DeepDiveResponse:
    """Failure envelope carrying only ``message``."""
    return DeepDiveResponse(success=False, error=message)
