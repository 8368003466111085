"""
Search result models.

``RawResult`` is what the upstream search provider hands over: a title, a URL
and a short description. Provider payloads usually carry many more keys
(``age``, ``profile``, ``meta_url``...); those are ignored.

``ScoredResult`` is a ``RawResult`` plus its ``SignalAnalysis`` and the
capture timestamp. The timestamp is informational only; scoring and ranking
never look at it.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from deepdive.models.analysis import SignalAnalysis
from deepdive.taxonomy.signal_taxonomy import Sentiment


class RawResult(BaseModel):
    """One search result as returned by the provider.

    Attributes:
        title: Result headline.
        url: Result URL; carried through untouched.
        description: Snippet text. Defaults to ``""`` when the provider omits it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str
    url: str
    description: str = ""


class ScoredResult(BaseModel):
    """A raw result coupled with its analysis.

    Attributes:
        title: Copied from the ``RawResult``.
        url: Copied from the ``RawResult``.
        description: Copied from the ``RawResult``.
        analysis: Signals, score and sentiment for this record.
        timestamp: UTC capture time (timezone-aware).
    """

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    description: str
    analysis: SignalAnalysis
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def validate_timezone_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("timestamp must be timezone-aware (UTC).")
        return v

    @classmethod
    def from_raw(
        cls,
        raw: RawResult,
        analysis: SignalAnalysis,
        timestamp: datetime,
    ) -> "ScoredResult":
        return cls(
            title=raw.title,
            url=raw.url,
            description=raw.description,
            analysis=analysis,
            timestamp=timestamp,
        )

    @property
    def score(self) -> int:
        return self.analysis.score

    @property
    def sentiment(self) -> Sentiment:
        return self.analysis.sentiment
