"""
Tests for deepdive/signals/aggregator.py.

What we test
------------
aggregate_report():
  - Empty batch -> zero summary, empty top signals, "no results" verdict.
  - Reference batch -> one of each sentiment, total 3.
  - average_score rounds half-up.
  - Top signals: count desc, first-seen tie-break, capped at top_n.

count_signals():
  - Counts, ordering and truncation in isolation.

determine_recommendation():
  - Exact thresholds at 30 / 0 / -30.
"""

from __future__ import annotations

import pytest

from deepdive.models.analysis import SignalAnalysis
from deepdive.models.result import ScoredResult
from deepdive.signals.aggregator import (
    HIGHLY_NEGATIVE,
    HIGHLY_POSITIVE,
    NEUTRAL_BALANCED,
    NO_RESULTS_RECOMMENDATION,
    SLIGHTLY_NEGATIVE,
    SLIGHTLY_POSITIVE,
    aggregate_report,
    count_signals,
    determine_recommendation,
    empty_report,
)
from deepdive.signals.ranker import rank_results, score_results
from deepdive.taxonomy.signal_taxonomy import classify_score


# ── Helpers ────────────────────────────────────────────────────────────────────

def _scored(
    ts,
    score: int = 0,
    positive: tuple[str, ...] = (),
    negative: tuple[str, ...] = (),
) -> ScoredResult:
    return ScoredResult(
        title="t",
        url="https://example.com",
        description="",
        analysis=SignalAnalysis(
            positive_signals=positive,
            negative_signals=negative,
            score=score,
            sentiment=classify_score(score),
        ),
        timestamp=ts,
    )


# ── Empty batch ───────────────────────────────────────────────────────────────

class TestEmptyBatch:
    def test_zero_summary(self):
        report = aggregate_report([])
        assert report.summary.total_results == 0
        assert report.summary.average_score == 0
        dist = report.summary.sentiment_distribution
        assert (dist.positive, dist.negative, dist.neutral) == (0, 0, 0)

    def test_empty_top_signals(self):
        report = aggregate_report([])
        assert report.top_signals.positive == []
        assert report.top_signals.negative == []

    def test_no_results_recommendation(self):
        report = aggregate_report([])
        assert report.recommendation == NO_RESULTS_RECOMMENDATION
        assert "no results" in report.recommendation.lower()

    def test_matches_empty_report(self):
        assert aggregate_report([]) == empty_report()


# ── Reference batch ───────────────────────────────────────────────────────────

class TestReferenceBatch:
    @pytest.fixture
    def report(self, mixed_batch, fixed_ts):
        return aggregate_report(rank_results(score_results(mixed_batch, captured_at=fixed_ts)))

    def test_distribution_one_each(self, report):
        dist = report.summary.sentiment_distribution
        assert (dist.positive, dist.negative, dist.neutral) == (1, 1, 1)

    def test_total(self, report):
        assert report.summary.total_results == 3

    def test_average_and_verdict(self, report):
        # +100, 0, -100
        assert report.summary.average_score == 0
        assert report.recommendation == NEUTRAL_BALANCED

    def test_top_signals_capped_at_five(self, report):
        assert [s.term for s in report.top_signals.positive] == [
            "breakthrough", "revolutionary", "innovative", "success", "partnership",
        ]
        assert [s.term for s in report.top_signals.negative] == [
            "bankrupt", "fraud", "scandal", "breach", "critical",
        ]
        assert all(s.count == 1 for s in report.top_signals.positive)


# ── Averages ──────────────────────────────────────────────────────────────────

class TestAverageScore:
    def test_half_rounds_up(self, fixed_ts):
        report = aggregate_report([_scored(fixed_ts, 1), _scored(fixed_ts, 0)])
        assert report.summary.average_score == 1
        assert report.recommendation == SLIGHTLY_POSITIVE

    def test_negative_half_rounds_towards_zero(self, fixed_ts):
        report = aggregate_report([_scored(fixed_ts, -1), _scored(fixed_ts, 0)])
        assert report.summary.average_score == 0
        assert report.recommendation == NEUTRAL_BALANCED

    def test_mean_of_scores(self, fixed_ts):
        report = aggregate_report(
            [_scored(fixed_ts, 100), _scored(fixed_ts, 50), _scored(fixed_ts, -50)]
        )
        # 100 / 3 = 33.3 -> 33
        assert report.summary.average_score == 33
        assert report.recommendation == HIGHLY_POSITIVE


# ── Top signals ───────────────────────────────────────────────────────────────

class TestTopSignals:
    def test_count_desc_with_first_seen_tie_break(self, fixed_ts):
        batch = [
            _scored(fixed_ts, 100, positive=("b", "a")),
            _scored(fixed_ts, 100, positive=("a", "c")),
            _scored(fixed_ts, 100, positive=("c",)),
        ]
        report = aggregate_report(batch)
        assert [(s.term, s.count) for s in report.top_signals.positive] == [
            ("a", 2), ("c", 2), ("b", 1),
        ]

    def test_batch_order_drives_tie_break(self, fixed_ts):
        first = _scored(fixed_ts, -100, negative=("loss",))
        second = _scored(fixed_ts, -100, negative=("bug",))
        assert [s.term for s in aggregate_report([first, second]).top_signals.negative] == [
            "loss", "bug",
        ]
        assert [s.term for s in aggregate_report([second, first]).top_signals.negative] == [
            "bug", "loss",
        ]

    def test_custom_top_n(self, fixed_ts):
        batch = [_scored(fixed_ts, 100, positive=("a", "b", "c"))]
        assert len(aggregate_report(batch, top_n=2).top_signals.positive) == 2

    def test_invalid_top_n(self, fixed_ts):
        with pytest.raises(ValueError, match="top_n"):
            aggregate_report([_scored(fixed_ts)], top_n=0)


class TestCountSignals:
    def test_counts(self):
        counts = count_signals(["x", "y", "x", "z", "x", "y"])
        assert [(c.term, c.count) for c in counts] == [("x", 3), ("y", 2), ("z", 1)]

    def test_not_alphabetical(self):
        counts = count_signals(["zeta", "alpha"])
        assert [c.term for c in counts] == ["zeta", "alpha"]

    def test_truncates(self):
        counts = count_signals([str(i) for i in range(10)], top_n=5)
        assert [c.term for c in counts] == ["0", "1", "2", "3", "4"]

    def test_empty(self):
        assert count_signals([]) == []


# ── Recommendation ────────────────────────────────────────────────────────────

class TestDetermineRecommendation:
    @pytest.mark.parametrize(
        "average, expected",
        [
            (100, HIGHLY_POSITIVE),
            (31, HIGHLY_POSITIVE),
            (30, SLIGHTLY_POSITIVE),
            (1, SLIGHTLY_POSITIVE),
            (0, NEUTRAL_BALANCED),
            (-1, SLIGHTLY_NEGATIVE),
            (-30, SLIGHTLY_NEGATIVE),
            (-31, HIGHLY_NEGATIVE),
            (-100, HIGHLY_NEGATIVE),
        ],
    )
    def test_thresholds(self, average, expected):
        assert determine_recommendation(average) == expected

    def test_labels(self):
        assert HIGHLY_POSITIVE.startswith("Highly Positive")
        assert SLIGHTLY_POSITIVE.startswith("Slightly Positive")
        assert HIGHLY_NEGATIVE.startswith("Highly Negative")
        assert SLIGHTLY_NEGATIVE.startswith("Slightly Negative")
        assert NEUTRAL_BALANCED.startswith("Neutral")
