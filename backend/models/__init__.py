"""SQLAlchemy persistence model for the student API.

This is the package scanned for entities at startup (see ``core.entity_scan``).
Every module placed here is imported during the scan.
"""

from .base import Base
from .student import Student

__all__ = [
    "Base",
    "Student",
]
