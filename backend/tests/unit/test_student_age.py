"""
Unit tests: age calculation and born-after validation (pure date arithmetic).
"""

from __future__ import annotations

from datetime import date

import pytest

from domain.students import calculate_age, validate_born_after


@pytest.mark.parametrize(
    "birth, today, expected",
    [
        (date(2000, 1, 1), date(2024, 6, 1), 24),
        (date(2000, 1, 1), date(2024, 1, 1), 24),
        (date(2000, 1, 1), date(2023, 12, 31), 23),
        (date(2000, 6, 15), date(2024, 6, 14), 23),
        (date(2000, 6, 15), date(2024, 6, 15), 24),
    ],
)
def test_calculate_age(birth: date, today: date, expected: int) -> None:
    assert calculate_age(birth, today=today) == expected


def test_calculate_age_leap_day_birthday() -> None:
    """Born on Feb 29: the birthday counts as passed from Mar 1 in non-leap years."""
    birth = date(2004, 2, 29)
    assert calculate_age(birth, today=date(2023, 2, 28)) == 18
    assert calculate_age(birth, today=date(2023, 3, 1)) == 19
    assert calculate_age(birth, today=date(2024, 2, 29)) == 20


def test_calculate_age_defaults_to_today() -> None:
    today = date.today()
    assert calculate_age(today) == 0


def test_validate_born_after_accepts_today_and_past() -> None:
    today = date(2024, 6, 1)
    assert validate_born_after(today, today=today) == today
    assert validate_born_after(date(2001, 1, 1), today=today) == date(2001, 1, 1)


def test_validate_born_after_rejects_future() -> None:
    with pytest.raises(ValueError, match="future"):
        validate_born_after(date(2024, 6, 2), today=date(2024, 6, 1))
