"""
Course Repository - Data access layer for courses
"""

from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from eduplatform.model.course_models import Course
from eduplatform.model.enums import Level
from eduplatform.repositories.base_repo import BaseRepository


class CourseRepository(BaseRepository[Course]):
    """
    Repository for Course entity
    """

    def __init__(self, session: AsyncSession):
        super().__init__(Course, session)

    async def search(
        self,
        level: Optional[Level] = None,
        category: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[Course]:
        """
        List courses, optionally filtered by level and/or category.

        Args:
            level: Only courses of this level
            category: Only courses of this category
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Matching courses, newest first
        """
        filters = {}
        if level is not None:
            filters["level"] = level
        if category:
            filters["category"] = category

        return await self.get_by_filters(
            filters, skip=skip, limit=limit, order_by="created_date", order_desc=True
        )
