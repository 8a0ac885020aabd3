"""Repository layer for DB access only (CRUD + simple queries).

Repositories operate on the models in ``models/`` and are pure DB access -
no business logic, no commits. They accept an AsyncSession explicitly.
"""

from .base import BaseRepository
from .student_repo import StudentRepository

__all__ = [
    "BaseRepository",
    "StudentRepository",
]
