"""Tests for the timezone aware datetime helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from librarium.utils import days_between, ensure_app_naive_datetime, ensure_app_timezone

START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (timedelta(0), 0),
        (timedelta(days=-2), 0),
        (timedelta(minutes=1), 1),
        (timedelta(days=1), 1),
        (timedelta(days=1, seconds=1), 2),
        (timedelta(days=2, hours=12), 3),
    ],
)
def test_days_between_counts_started_days(elapsed, expected) -> None:
    assert days_between(START, START + elapsed) == expected


def test_naive_values_are_read_in_app_timezone() -> None:
    naive = datetime(2024, 3, 1, 12, 0)

    assert ensure_app_timezone(naive) == START
    assert days_between(naive, START + timedelta(hours=30)) == 2


def test_naive_conversion_round_trips() -> None:
    assert ensure_app_naive_datetime(START) == datetime(2024, 3, 1, 12, 0)
    assert ensure_app_naive_datetime(None) is None
