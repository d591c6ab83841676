"""
Diagnostic Repository - Data access layer for diagnostic quizzes and results
"""
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduplatform.model.diagnostic_models import DiagnosticQuiz, DiagnosticResult
from eduplatform.repositories.base_repo import BaseRepository


class DiagnosticQuizRepository(BaseRepository[DiagnosticQuiz]):
    """
    Repository for DiagnosticQuiz entity (questions are loaded eagerly)
    """

    def __init__(self, session: AsyncSession):
        super().__init__(DiagnosticQuiz, session)

    async def get_all_by_category(self) -> Sequence[DiagnosticQuiz]:
        """
        Get all quizzes ordered by category, newest first within a category.

        Returns:
            List of DiagnosticQuiz instances
        """
        query = select(DiagnosticQuiz).order_by(
            DiagnosticQuiz.category, DiagnosticQuiz.created_date.desc()
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_by_teacher(self, teacher_id: str) -> Sequence[DiagnosticQuiz]:
        """
        Get quizzes authored by one teacher, newest first.

        Args:
            teacher_id: Author user id

        Returns:
            List of DiagnosticQuiz instances
        """
        query = (
            select(DiagnosticQuiz)
            .where(DiagnosticQuiz.teacher_id == teacher_id)
            .order_by(DiagnosticQuiz.created_date.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()


class DiagnosticResultRepository(BaseRepository[DiagnosticResult]):
    """
    Repository for DiagnosticResult entity. Results are insert-only.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(DiagnosticResult, session)

    async def get_by_quiz(self, quiz_id: UUID) -> Sequence[DiagnosticResult]:
        """
        Get all results of one quiz, newest first.

        Args:
            quiz_id: UUID of the quiz

        Returns:
            List of DiagnosticResult instances
        """
        query = (
            select(DiagnosticResult)
            .where(DiagnosticResult.quiz_id == quiz_id)
            .order_by(DiagnosticResult.completed_at.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_by_student(self, student_id: str) -> Sequence[DiagnosticResult]:
        """
        Get all results of one student, newest first.

        Args:
            student_id: Student user id

        Returns:
            List of DiagnosticResult instances
        """
        query = (
            select(DiagnosticResult)
            .where(DiagnosticResult.student_id == student_id)
            .order_by(DiagnosticResult.completed_at.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()
