"""
Result ranker: analyses a batch of raw results and orders it by score.

Usage flow
----------
1. score_results(raw_results, lexicon)
   -> list[ScoredResult]   (input order, one per raw result)

2. rank_results(scored)
   -> list[ScoredResult]   (score descending, ties keep input order)

Ordering contract
-----------------
``rank_results`` relies on ``sorted()`` being stable: two records with equal
scores come out in the same relative order they went in. There is no
secondary sort key (not URL, not title).

Parallelism
-----------
Records are independent, so ``score_results(max_workers>1)`` fans analysis
out over a thread pool. ``Executor.map`` yields in submission order, so the
output order is the same as the sequential path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from deepdive.models.result import RawResult, ScoredResult
from deepdive.signals.analyzer import analyze_signals
from deepdive.signals.lexicon import DEFAULT_LEXICON, SignalLexicon
from deepdive.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


def score_results(
    raw_results: Sequence[RawResult],
    lexicon: SignalLexicon = DEFAULT_LEXICON,
    captured_at: datetime | None = None,
    max_workers: int = 1,
) -> list[ScoredResult]:
    """Analyse every raw result and attach its analysis and capture time.

    Args:
        raw_results: Provider records, already validated as ``RawResult``.
        lexicon:     Vocabulary to score against.
        captured_at: Timestamp stamped on every result. Defaults to now (UTC).
                     One timestamp is shared by the whole batch.
        max_workers: Thread pool size; ``1`` analyses sequentially.

    Returns:
        ``ScoredResult`` list in input order.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}.")

    timestamp = captured_at or utc_now()

    def _score_one(raw: RawResult) -> ScoredResult:
        analysis = analyze_signals(raw.title, raw.description, lexicon=lexicon)
        return ScoredResult.from_raw(raw, analysis, timestamp)

    if max_workers == 1 or len(raw_results) <= 1:
        scored = [_score_one(raw) for raw in raw_results]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            scored = list(executor.map(_score_one, raw_results))

    logger.debug(
        "Scored %d result(s) with lexicon '%s' (workers=%d)",
        len(scored), lexicon.version, max_workers,
    )
    return scored


def rank_results(scored: Sequence[ScoredResult]) -> list[ScoredResult]:
    """Return a new list ordered by score descending.

    Equal scores keep their relative input order. ``scored`` is not modified.
    """
    return sorted(scored, key=lambda r: -r.analysis.score)
