"""Student CRUD: compose repository calls, commit writes, raise domain errors."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.students import validate_born_after
from models.student import Student
from repositories.student_repo import StudentRepository

logger = logging.getLogger(__name__)


class StudentNotFoundError(LookupError):
    """No student with the requested public id."""

    def __init__(self, business_id: int) -> None:
        super().__init__(f"Student {business_id} not found")
        self.business_id = business_id


class DuplicateStudentError(ValueError):
    """A student with the same public id already exists."""

    def __init__(self, business_id: int) -> None:
        super().__init__(f"Student {business_id} already exists")
        self.business_id = business_id


class InvalidBirthDateError(ValueError):
    """Birth-date filter outside the accepted range."""


async def list_students(session: AsyncSession) -> List[Student]:
    return await StudentRepository(session).list_all()


async def get_student(session: AsyncSession, business_id: int) -> Student:
    """Return the student with this public id or raise StudentNotFoundError."""
    student = await StudentRepository(session).get_by_business_id(business_id)
    if student is None:
        raise StudentNotFoundError(business_id)
    return student


async def list_born_after(
    session: AsyncSession, birth_date: date, today: Optional[date] = None
) -> List[Student]:
    """Students born strictly after birth_date, youngest first. Future dates are rejected."""
    try:
        validate_born_after(birth_date, today=today)
    except ValueError as e:
        raise InvalidBirthDateError(str(e)) from e
    return await StudentRepository(session).list_born_after(birth_date)


async def create_student(
    session: AsyncSession,
    *,
    business_id: int,
    first_name: Optional[str],
    last_name: Optional[str],
    birth_date: date,
) -> Student:
    repo = StudentRepository(session)
    if await repo.get_by_business_id(business_id) is not None:
        raise DuplicateStudentError(business_id)

    student = Student(
        business_id=business_id,
        first_name=first_name,
        last_name=last_name,
        birth_date=birth_date,
    )
    try:
        await repo.add(student)
        await session.commit()
    except IntegrityError as e:
        # concurrent insert of the same public id
        await session.rollback()
        raise DuplicateStudentError(business_id) from e
    logger.info("Created student %s", business_id)
    return student


async def update_student(
    session: AsyncSession,
    business_id: int,
    *,
    first_name: Optional[str],
    last_name: Optional[str],
    birth_date: date,
) -> Student:
    """Replace names and birth date of an existing student. The public id never changes."""
    student = await get_student(session, business_id)
    student.first_name = first_name
    student.last_name = last_name
    student.birth_date = birth_date
    await session.commit()
    logger.info("Updated student %s", business_id)
    return student


async def delete_student(session: AsyncSession, business_id: int) -> None:
    repo = StudentRepository(session)
    student = await get_student(session, business_id)
    await repo.delete(student)
    await session.commit()
    logger.info("Deleted student %s", business_id)
