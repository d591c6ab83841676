"""
Enrollment Repository - Data access layer for enrollments and badges
"""
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduplatform.model.enrollment_models import Enrollment, Badge
from eduplatform.repositories.base_repo import BaseRepository


class EnrollmentRepository(BaseRepository[Enrollment]):
    """
    Repository for Enrollment entity.

    Uniqueness of (student_id, course_id) is enforced by the
    ``uq_enrollment_student_course`` constraint; use ``create_unique`` to insert.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(Enrollment, session)

    async def get_by_student(self, student_id: str) -> Sequence[Enrollment]:
        """
        Get every enrollment of one student, newest first.

        Args:
            student_id: Student user id

        Returns:
            List of Enrollment instances with their course loaded
        """
        query = (
            select(Enrollment)
            .where(Enrollment.student_id == student_id)
            .order_by(Enrollment.enrolled_at.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_by_course(self, course_id: UUID) -> Sequence[Enrollment]:
        """
        Get every enrollment of one course, newest first.

        Args:
            course_id: UUID of the course

        Returns:
            List of Enrollment instances with their student loaded
        """
        query = (
            select(Enrollment)
            .where(Enrollment.course_id == course_id)
            .order_by(Enrollment.enrolled_at.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_for_student_course(self, student_id: str, course_id: UUID) -> Optional[Enrollment]:
        """
        Get the enrollment of a student in a course, if any.

        Args:
            student_id: Student user id
            course_id: UUID of the course

        Returns:
            Enrollment instance or None
        """
        query = select(Enrollment).where(
            Enrollment.student_id == student_id, Enrollment.course_id == course_id
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()


class BadgeRepository(BaseRepository[Badge]):
    """
    Repository for Badge entity. One badge per (user_id, course_id),
    guarded by ``uq_badge_user_course``.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(Badge, session)

    async def get_for_user_course(self, user_id: str, course_id: UUID) -> Optional[Badge]:
        """
        Get the badge a user earned for a course, if any.

        Args:
            user_id: Badge holder
            course_id: UUID of the course

        Returns:
            Badge instance or None
        """
        query = select(Badge).where(Badge.user_id == user_id, Badge.course_id == course_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_user(self, user_id: str) -> Sequence[Badge]:
        """
        Get all badges of a user, most recent first.

        Args:
            user_id: Badge holder

        Returns:
            List of Badge instances
        """
        query = (
            select(Badge)
            .where(Badge.user_id == user_id)
            .order_by(Badge.issued_at.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()
