"""
Export helpers for handing results to other tools.

``write_response_json()`` writes the response envelope exactly as a web
handler would return it (wire aliases applied, ``None`` fields dropped).
``write_results_csv()`` turns ranked results into flat rows for
spreadsheet-style consumers.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from deepdive.models.response import DeepDiveResponse
from deepdive.models.result import ScoredResult
from deepdive.utils.time_utils import to_iso_utc

logger = logging.getLogger(__name__)

_CSV_FIELDS = [
    "rank", "title", "url", "score", "sentiment",
    "positive_signals", "negative_signals", "timestamp",
]


def response_to_json(response: DeepDiveResponse, indent: int | None = 2) -> str:
    """Serialise ``response`` to a JSON string in its wire form."""
    return json.dumps(response.to_payload(), indent=indent, ensure_ascii=False)


def write_response_json(response: DeepDiveResponse, path: Path) -> Path:
    """Write ``response`` to ``path`` as pretty-printed JSON.

    Args:
        response: Envelope from ``build_response()`` or ``error_response()``.
        path:     Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(response_to_json(response), encoding="utf-8")
    logger.info("Response JSON written: %s (%s results)", path, response.count)
    return path


def flatten_results_for_export(results: Sequence[ScoredResult]) -> list[dict]:
    """One flat row per result; signal tuples are joined with ``"; "``.

    Columns: rank, title, url, score, sentiment, positive_signals,
    negative_signals, timestamp.
    """
    rows: list[dict] = []
    for rank, r in enumerate(results, start=1):
        rows.append(
            {
                "rank":             rank,
                "title":            r.title,
                "url":              r.url,
                "score":            r.analysis.score,
                "sentiment":        r.analysis.sentiment.value,
                "positive_signals": "; ".join(r.analysis.positive_signals),
                "negative_signals": "; ".join(r.analysis.negative_signals),
                "timestamp":        to_iso_utc(r.timestamp),
            }
        )
    return rows


def write_results_csv(results: Sequence[ScoredResult], path: Path) -> Path:
    """Write ranked results to a UTF-8 CSV file (header only when empty).

    Args:
        results: Ranked results.
        path:    Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = flatten_results_for_export(results)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Results CSV written: %s (%d rows)", path, len(rows))
    return path
