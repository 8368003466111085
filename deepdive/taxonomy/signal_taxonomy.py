"""
Signal taxonomy for search-result sentiment analysis.

Three small vocabularies describe every analysis:
  - ``Polarity``  - which side a lexicon term pulls the score towards.
  - ``Tier``      - how hard it pulls (high = 2, medium = 1).
  - ``Sentiment`` - the three-way classification derived from the final score.

Sentiment is never set independently of the score: ``classify_score()`` is the
single place the thresholds live.

    score >  15  -> positive
    score < -15  -> negative
    otherwise    -> neutral

This module has NO imports from any other ``deepdive`` package.
"""

from __future__ import annotations

import math
from enum import StrEnum


class Polarity(StrEnum):
    """Direction a lexicon term pushes the score."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


class Tier(StrEnum):
    """Impact class of a lexicon term."""

    HIGH = "high"
    """Strong signal; contributes 2 to its polarity's running score."""

    MEDIUM = "medium"
    """Moderate signal; contributes 1."""


class Sentiment(StrEnum):
    """Classification of one analysed record."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


TIER_WEIGHTS: dict[Tier, int] = {
    Tier.HIGH:   2,
    Tier.MEDIUM: 1,
}

SCORE_MIN = -100
SCORE_MAX = 100

POSITIVE_THRESHOLD = 15
NEGATIVE_THRESHOLD = -15


def classify_score(score: int) -> Sentiment:
    """Map a bounded score onto a ``Sentiment``.

    Both thresholds are exclusive: a score of exactly 15 or -15 is neutral.
    """
    if score > POSITIVE_THRESHOLD:
        return Sentiment.POSITIVE
    if score < NEGATIVE_THRESHOLD:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going towards +infinity.

    ``round()`` uses banker's rounding (``round(0.5) == 0``), which would put
    a batch averaging 0.5 into the neutral bucket. Scores and averages round
    12.5 -> 13 and -12.5 -> -12.
    """
    return int(math.floor(value + 0.5))
