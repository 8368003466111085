"""
Report aggregation: reduces a ranked batch into a ``Report``.

Steps
-----
1. Empty batch -> early exit with a zero-valued report and the
   "no results" recommendation. Nothing else is computed.
2. total_results, sentiment_distribution from the per-record sentiments.
3. average_score = round_half_up(mean(score)).
4. top_signals: flatten every record's signal tuple per polarity, count each
   term, order by count descending, keep the first N. Equal counts keep the
   order in which terms were first seen in the batch (not alphabetical).
5. recommendation from average_score:

       > 30   Highly Positive
       > 0    Slightly Positive
       < -30  Highly Negative
       < 0    Slightly Negative
       == 0   Neutral
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from deepdive.models.report import (
    Report,
    ReportSummary,
    SentimentDistribution,
    SignalCount,
    TopSignals,
)
from deepdive.models.result import ScoredResult
from deepdive.taxonomy.signal_taxonomy import Sentiment, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5

NO_RESULTS_RECOMMENDATION = "No results found for this query."

HIGHLY_POSITIVE   = "Highly Positive - Strong positive signals detected"
SLIGHTLY_POSITIVE = "Slightly Positive - More positive than negative signals"
HIGHLY_NEGATIVE   = "Highly Negative - Strong negative signals detected"
SLIGHTLY_NEGATIVE = "Slightly Negative - More negative than positive signals"
NEUTRAL_BALANCED  = "Neutral - Balanced positive and negative signals"


def determine_recommendation(average_score: int) -> str:
    """Pick the recommendation line for a batch average.

    Rules (evaluated in order, first match wins):
        1. > 30  : Highly Positive
        2. > 0   : Slightly Positive
        3. < -30 : Highly Negative
        4. < 0   : Slightly Negative
        5. == 0  : Neutral
    """
    if average_score > 30:
        return HIGHLY_POSITIVE
    if average_score > 0:
        return SLIGHTLY_POSITIVE
    if average_score < -30:
        return HIGHLY_NEGATIVE
    if average_score < 0:
        return SLIGHTLY_NEGATIVE
    return NEUTRAL_BALANCED


def count_signals(terms: Iterable[str], top_n: int = DEFAULT_TOP_N) -> list[SignalCount]:
    """Count term occurrences and return the ``top_n`` most frequent.

    ``Counter`` keeps first-insertion order and ``sorted()`` is stable, so
    ties come out in first-seen order.
    """
    counts: Counter[str] = Counter()
    for term in terms:
        counts[term] += 1

    ordered = sorted(counts.items(), key=lambda kv: -kv[1])
    return [SignalCount(term=term, count=count) for term, count in ordered[:top_n]]


def empty_report() -> Report:
    """Zero-valued report for a batch with no records."""
    return Report(
        summary=ReportSummary(),
        top_signals=TopSignals(),
        recommendation=NO_RESULTS_RECOMMENDATION,
    )


def aggregate_report(
    ranked: Sequence[ScoredResult],
    top_n: int = DEFAULT_TOP_N,
) -> Report:
    """Summarise a ranked batch.

    Args:
        ranked: Scored results, normally the output of ``rank_results()``.
                Order only affects top-signal tie-breaking.
        top_n:  Maximum entries per top-signal list.

    Returns:
        ``Report``. An empty ``ranked`` yields ``empty_report()``.
    """
    if top_n < 1:
        raise ValueError(f"top_n must be >= 1, got {top_n}.")

    if not ranked:
        logger.debug("aggregate_report: empty batch, returning zero report")
        return empty_report()

    total = len(ranked)
    by_sentiment: Counter[Sentiment] = Counter(r.analysis.sentiment for r in ranked)
    average_score = round_half_up(sum(r.analysis.score for r in ranked) / total)

    top_positive = count_signals(
        (term for r in ranked for term in r.analysis.positive_signals), top_n
    )
    top_negative = count_signals(
        (term for r in ranked for term in r.analysis.negative_signals), top_n
    )

    return Report(
        summary=ReportSummary(
            total_results=total,
            average_score=average_score,
            sentiment_distribution=SentimentDistribution(
                positive=by_sentiment[Sentiment.POSITIVE],
                negative=by_sentiment[Sentiment.NEGATIVE],
                neutral=by_sentiment[Sentiment.NEUTRAL],
            ),
        ),
        top_signals=TopSignals(positive=top_positive, negative=top_negative),
        recommendation=determine_recommendation(average_score),
    )
