"""Tests for deepdive.utils.time_utils."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from deepdive.utils.time_utils import to_iso_utc, utc_now


def test_utc_now_is_aware() -> None:
    assert utc_now().tzinfo is not None


def test_to_iso_utc_converts_offsets() -> None:
    cet = timezone(timedelta(hours=2))
    assert to_iso_utc(datetime(2024, 9, 15, 14, 0, tzinfo=cet)) == "2024-09-15T12:00:00Z"


def test_to_iso_utc_rejects_naive() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        to_iso_utc(datetime(2024, 9, 15, 12, 0))
