"""Student CRUD endpoints: /, /read, /read/born-after, /create, /update, /delete."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from pydantic import BaseModel, ConfigDict, Field, computed_field
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from domain.students import calculate_age
from models.student import Student
from services import student_service
from services.student_service import (
    DuplicateStudentError,
    InvalidBirthDateError,
    StudentNotFoundError,
)

router = APIRouter(tags=["students"])

# Public ids are 32-bit signed integers
STUDENT_ID_MIN = -(2**31)
STUDENT_ID_MAX = 2**31 - 1


class StudentBody(BaseModel):
    """Body for POST /create and PUT /update/{student_id}. Unknown fields (e.g. age) are ignored; omitted names stay null."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "first_name": "John",
                "last_name": "Doe",
                "birth_date": "2000-01-01",
            }
        }
    )

    id: int = Field(..., ge=STUDENT_ID_MIN, le=STUDENT_ID_MAX, description="Public student id")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    birth_date: date = Field(default=date.min, description="ISO date, YYYY-MM-DD; 0001-01-01 when omitted")


class StudentDto(BaseModel):
    """Student as returned by the API; ``id`` is the public id."""

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    birth_date: date

    @computed_field  # type: ignore[prop-decorator]
    @property
    def age(self) -> int:
        return calculate_age(self.birth_date)

    @classmethod
    def from_entity(cls, student: Student) -> "StudentDto":
        return cls(
            id=student.business_id,
            first_name=student.first_name,
            last_name=student.last_name,
            birth_date=student.birth_date,
        )


@router.get("/", summary="List all students", response_model=List[StudentDto])
async def read_all(session: AsyncSession = Depends(get_db_session)) -> List[StudentDto]:
    students = await student_service.list_students(session)
    return [StudentDto.from_entity(s) for s in students]


@router.get(
    "/read/born-after/{birth_date}",
    summary="Students born after a date",
    description="Students with birth_date strictly after the given date, youngest first. 400 if the date is in the future.",
    response_model=List[StudentDto],
)
async def read_born_after(
    birth_date: date,
    session: AsyncSession = Depends(get_db_session),
) -> List[StudentDto]:
    try:
        students = await student_service.list_born_after(session, birth_date)
    except InvalidBirthDateError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [StudentDto.from_entity(s) for s in students]


@router.get("/read/{student_id}", summary="Read one student", response_model=StudentDto)
async def read_one(
    student_id: int = Path(..., ge=STUDENT_ID_MIN, le=STUDENT_ID_MAX),
    session: AsyncSession = Depends(get_db_session),
) -> StudentDto:
    try:
        student = await student_service.get_student(session, student_id)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return StudentDto.from_entity(student)


@router.post("/create", summary="Create a student", response_model=StudentDto)
async def create(
    body: StudentBody,
    session: AsyncSession = Depends(get_db_session),
) -> StudentDto:
    """
    Create a student from the body and return it.

    - **409** when a student with the same id already exists.
    - **400** when the body is missing or invalid.
    """
    try:
        student = await student_service.create_student(
            session,
            business_id=body.id,
            first_name=body.first_name,
            last_name=body.last_name,
            birth_date=body.birth_date,
        )
    except DuplicateStudentError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return StudentDto.from_entity(student)


@router.put("/update/{student_id}", summary="Update a student", response_model=StudentDto)
async def update(
    *,
    student_id: int = Path(..., ge=STUDENT_ID_MIN, le=STUDENT_ID_MAX),
    body: StudentBody,
    session: AsyncSession = Depends(get_db_session),
) -> StudentDto:
    """Replace names and birth date. The id in the path wins over ``body.id``."""
    try:
        student = await student_service.update_student(
            session,
            student_id,
            first_name=body.first_name,
            last_name=body.last_name,
            birth_date=body.birth_date,
        )
    except StudentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return StudentDto.from_entity(student)


@router.delete("/delete/{student_id}", summary="Delete a student")
async def delete(
    student_id: int = Path(..., ge=STUDENT_ID_MIN, le=STUDENT_ID_MAX),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    try:
        await student_service.delete_student(session, student_id)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=200)
