"""Unit tests for calendar helpers."""

from datetime import date, datetime

import pytest

from app.utils.time import add_one_month, get_utc_now


@pytest.mark.parametrize(
    "end_date, expected",
    [
        (date(2024, 1, 15), date(2024, 2, 15)),
        # Leap year: clamp to Feb 29, never overflow into March
        (date(2024, 1, 31), date(2024, 2, 29)),
        (date(2023, 1, 31), date(2023, 2, 28)),
        (date(2024, 1, 30), date(2024, 2, 29)),
        (date(2024, 3, 31), date(2024, 4, 30)),
        (date(2024, 12, 15), date(2025, 1, 15)),
        (date(2024, 12, 31), date(2025, 1, 31)),
        (date(2024, 2, 29), date(2024, 3, 29)),
    ],
)
def test_add_one_month(end_date, expected):
    assert add_one_month(end_date) == expected


def test_add_one_month_does_not_mutate_input():
    original = date(2024, 1, 31)
    add_one_month(original)
    assert original == date(2024, 1, 31)


def test_get_utc_now_is_naive():
    now = get_utc_now()
    assert isinstance(now, datetime)
    assert now.tzinfo is None
