"""
Batch report models.

A ``Report`` summarises a ranked batch of ``ScoredResult`` records:

  summary
    total_results           - number of records in the batch
    average_score           - mean score, rounded half-up; 0 for an empty batch
    sentiment_distribution  - record counts per sentiment
  top_signals
    positive / negative     - up to N ``SignalCount`` entries, most frequent first
  recommendation            - one descriptive line chosen from ``average_score``

Wire names mirror the JSON document consumed by the UI. Note that
``sentiment_distribution`` keeps its snake_case name on the wire.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class SentimentDistribution(BaseModel):
    """Record counts per sentiment."""

    model_config = ConfigDict(frozen=True)

    positive: int = Field(default=0, ge=0)
    negative: int = Field(default=0, ge=0)
    neutral: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral


class ReportSummary(BaseModel):
    """Headline statistics for a batch."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_results: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("total_results", "totalResults"),
        serialization_alias="totalResults",
    )
    average_score: int = Field(
        default=0,
        ge=-100,
        le=100,
        validation_alias=AliasChoices("average_score", "averageScore"),
        serialization_alias="averageScore",
    )
    sentiment_distribution: SentimentDistribution = SentimentDistribution()

    @model_validator(mode="after")
    def validate_distribution_total(self) -> "ReportSummary":
        if self.sentiment_distribution.total != self.total_results:
            raise ValueError(
                f"sentiment_distribution sums to {self.sentiment_distribution.total}, "
                f"expected total_results={self.total_results}."
            )
        return self


class SignalCount(BaseModel):
    """How many records in a batch mentioned ``term``."""

    model_config = ConfigDict(frozen=True)

    term: str
    count: int = Field(ge=1)


class TopSignals(BaseModel):
    """Most frequent signals per polarity, most frequent first."""

    model_config = ConfigDict(frozen=True)

    positive: list[SignalCount] = []
    negative: list[SignalCount] = []


class Report(BaseModel):
    """Aggregate view of a ranked batch.

    Attributes:
        summary: Totals, rounded average score and sentiment distribution.
        top_signals: Most frequent positive / negative terms.
        recommendation: Human-readable verdict for the batch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: ReportSummary = ReportSummary()
    top_signals: TopSignals = Field(
        default=TopSignals(),
        validation_alias=AliasChoices("top_signals", "topSignals"),
        serialization_alias="topSignals",
    )
    recommendation: str

    @property
    def is_empty(self) -> bool:
        return self.summary.total_results == 0
