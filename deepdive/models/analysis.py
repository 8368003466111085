"""
Per-record signal analysis model.

``SignalAnalysis`` is the output of ``analyze_signals()`` for one
``(title, description)`` pair. It is frozen and self-checking:

  - ``score`` must lie in ``[-100, 100]``.
  - ``sentiment`` must be exactly ``classify_score(score)``; a caller cannot
    build an analysis whose label disagrees with its number.
  - Signal tuples keep first-match order and may not repeat a term. Order
    matters downstream (top-signal tie-breaking), so they are tuples rather
    than sets.

Wire names follow the downstream JSON document (``positiveSignals``,
``negativeSignals``); use ``model_dump(by_alias=True)`` to produce them.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from deepdive.taxonomy.signal_taxonomy import (
    SCORE_MAX,
    SCORE_MIN,
    Sentiment,
    classify_score,
)


class SignalAnalysis(BaseModel):
    """Signals detected in one record and the score derived from them.

    Attributes:
        positive_signals: Matched positive terms, first-match order, no repeats.
        negative_signals: Matched negative terms, first-match order, no repeats.
        score: Normalised score in ``[-100, 100]``.
        sentiment: Classification derived from ``score``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    positive_signals: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("positive_signals", "positiveSignals"),
        serialization_alias="positiveSignals",
    )
    negative_signals: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("negative_signals", "negativeSignals"),
        serialization_alias="negativeSignals",
    )
    score: int = 0
    sentiment: Sentiment = Sentiment.NEUTRAL

    @field_validator("score")
    @classmethod
    def validate_score_range(cls, v: int) -> int:
        if not SCORE_MIN <= v <= SCORE_MAX:
            raise ValueError(f"score must be in [{SCORE_MIN}, {SCORE_MAX}], got {v}.")
        return v

    @field_validator("positive_signals", "negative_signals")
    @classmethod
    def validate_unique_signals(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(v)) != len(v):
            raise ValueError(f"Signal terms must not repeat, got {list(v)}.")
        return v

    @model_validator(mode="after")
    def validate_sentiment_matches_score(self) -> "SignalAnalysis":
        expected = classify_score(self.score)
        if self.sentiment != expected:
            raise ValueError(
                f"sentiment '{self.sentiment}' is inconsistent with score "
                f"{self.score} (expected '{expected}')."
            )
        return self

    @property
    def signal_count(self) -> int:
        """Total number of distinct signals across both polarities."""
        return len(self.positive_signals) + len(self.negative_signals)
