"""
Shared pytest fixtures for the DeepDive test suite.

Provides:
  - The three reference records (clearly positive, clearly negative, neutral)
    as ``RawResult`` objects.
  - A small alternative lexicon for tests that need exact control over weights.
  - A fixed capture timestamp so scored results compare deterministically.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from deepdive.models.result import RawResult
from deepdive.signals.lexicon import SignalLexicon

FIXED_TS = datetime(2024, 9, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Reference records ─────────────────────────────────────────────────────────

@pytest.fixture
def positive_raw() -> RawResult:
    return RawResult(
        title="Revolutionary AI Breakthrough Achieves Success",
        url="https://example.com/positive",
        description="Innovative technology partnership funded by leading investors",
    )


@pytest.fixture
def negative_raw() -> RawResult:
    return RawResult(
        title="Company Faces Bankruptcy and Fraud Scandal",
        url="https://example.com/negative",
        description="Critical security breach exposes customer data",
    )


@pytest.fixture
def neutral_raw() -> RawResult:
    return RawResult(
        title="Company Releases New Product",
        url="https://example.com/neutral",
        description="Updates features and announces changes",
    )


@pytest.fixture
def mixed_batch(neutral_raw, negative_raw, positive_raw) -> list[RawResult]:
    """Reference records in neutral, negative, positive order."""
    return [neutral_raw, negative_raw, positive_raw]


@pytest.fixture
def fixed_ts() -> datetime:
    return FIXED_TS


# ── Lexicons ──────────────────────────────────────────────────────────────────

@pytest.fixture
def tiny_lexicon() -> SignalLexicon:
    """Two terms per polarity, one per tier."""
    return SignalLexicon.from_tiers(
        version="test-1",
        positive={"high": ["win"], "medium": ["good"]},
        negative={"high": ["crash"], "medium": ["slow"]},
    )
