"""
Response envelope handed to the presentation layer.

Success::

    {"success": true, "results": [...], "report": {...}, "query": "...", "count": 3}

Failure::

    {"success": false, "error": "..."}

``to_payload()`` drops ``None`` fields and applies wire aliases, so the
result can go straight to ``json.dumps``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from deepdive.models.report import Report
from deepdive.models.result import ScoredResult


class DeepDiveResponse(BaseModel):
    """Envelope around one analysed batch, or an error message."""

    model_config = ConfigDict(frozen=True)

    success: bool
    results: Optional[list[ScoredResult]] = None
    report: Optional[Report] = None
    query: Optional[str] = None
    count: Optional[int] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def validate_shape(self) -> "DeepDiveResponse":
        if self.success:
            if self.results is None or self.report is None:
                raise ValueError("A successful response needs both results and report.")
            if self.count != len(self.results):
                raise ValueError(
                    f"count ({self.count}) must equal len(results) ({len(self.results)})."
                )
        elif not self.error:
            raise ValueError("A failed response needs a non-empty error message.")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready wire form (aliases applied, ``None`` omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
