"""
Student domain rules: age calculation and birth-date filter validation.
Pure functions; no database access.
"""

from domain.students.age import calculate_age, validate_born_after

__all__ = [
    "calculate_age",
    "validate_born_after",
]
