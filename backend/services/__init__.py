"""Services: composition layer between routes and repositories."""

from .student_service import (
    DuplicateStudentError,
    InvalidBirthDateError,
    StudentNotFoundError,
    create_student,
    delete_student,
    get_student,
    list_born_after,
    list_students,
    update_student,
)

__all__ = [
    "DuplicateStudentError",
    "InvalidBirthDateError",
    "StudentNotFoundError",
    "create_student",
    "delete_student",
    "get_student",
    "list_born_after",
    "list_students",
    "update_student",
]
