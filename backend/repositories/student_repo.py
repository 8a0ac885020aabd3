from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.student import Student
from .base import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Repository for Student entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_business_id(self, business_id: int) -> Optional[Student]:
        """Get student by its public id."""
        stmt = select(Student).where(Student.business_id == business_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Student]:
        """List all students ordered by public id."""
        stmt = select(Student).order_by(Student.business_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_born_after(self, birth_date: date) -> List[Student]:
        """List students born strictly after birth_date, youngest first."""
        stmt = (
            select(Student)
            .where(Student.birth_date > birth_date)
            .order_by(desc(Student.birth_date), Student.business_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
