"""Age arithmetic on calendar dates."""

from __future__ import annotations

from datetime import date
from typing import Optional


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """
    Return completed years between birth_date and today.

    One year is subtracted while this year's birthday is still ahead, so
    2000-01-01 is 24 on 2024-01-01 and 23 on 2023-12-31.
    """
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def validate_born_after(birth_date: date, today: Optional[date] = None) -> date:
    """Return birth_date unchanged. Raises ValueError if it lies in the future."""
    today = today or date.today()
    if birth_date > today:
        raise ValueError(f"birth date {birth_date.isoformat()} cannot be in the future")
    return birth_date
