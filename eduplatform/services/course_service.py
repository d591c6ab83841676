"""
Course Service - authoring and browsing of courses.

A course owns its lessons and its final assessment. Both are stored as ordered
child rows whose ``position`` is their identity; updates replace them
wholesale.
"""

import logging
from typing import List, Optional, Sequence
from uuid import UUID

from eduplatform.config import Settings
from eduplatform.model.course_models import Course, CourseLesson, AssessmentQuestion
from eduplatform.model.enums import Level, UserRole
from eduplatform.repositories.course_repo import CourseRepository
from eduplatform.repositories.enrollment_repo import EnrollmentRepository, BadgeRepository
from eduplatform.schemas.course import (
    CreateCourseRequest,
    UpdateCourseRequest,
    LessonRequest,
    FinalAssessmentRequest,
)
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.access_policy import require_role, require_owner_or_admin, is_owner_or_admin
from eduplatform.utils.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(
            self,
            settings: Settings,
            course_repository: CourseRepository,
            enrollment_repository: EnrollmentRepository,
            badge_repository: BadgeRepository,
    ):
        self._settings = settings
        self._course_repository = course_repository
        self._enrollment_repository = enrollment_repository
        self._badge_repository = badge_repository

    async def list_courses(
            self,
            level: Optional[Level] = None,
            category: Optional[str] = None,
            skip: int = 0,
            limit: int = 100,
    ) -> Sequence[Course]:
        return await self._course_repository.search(
            level=level, category=category, skip=skip, limit=limit
        )

    async def get_course(self, course_id: UUID) -> Course:
        course = await self._course_repository.get_by_id(course_id)
        if not course:
            raise ResourceNotFoundException(f"Course not found with ID: {course_id}")
        return course

    @staticmethod
    def can_view_answers(actor: CurrentUser, course: Course) -> bool:
        return is_owner_or_admin(actor, course.teacher_id)

    async def create_course(self, actor: CurrentUser, request: CreateCourseRequest) -> Course:
        require_role(actor, UserRole.TEACHER, UserRole.ADMIN)

        assessment = request.final_assessment or FinalAssessmentRequest()
        course = Course(
            title=request.title,
            description=request.description,
            level=request.level,
            category=request.category,
            teacher_id=actor.id,
            passing_score=self._passing_score(assessment),
            lessons=self._build_lessons(request.lessons),
            assessment_questions=self._build_questions(assessment),
        )
        course = await self._course_repository.create(course)
        logger.info(
            f"Course {course.id} created by {actor.id} with {len(course.lessons)} lessons "
            f"and {len(course.assessment_questions)} assessment questions"
        )
        return course

    async def update_course(
            self, actor: CurrentUser, course_id: UUID, request: UpdateCourseRequest
    ) -> Course:
        require_role(actor, UserRole.TEACHER, UserRole.ADMIN)
        course = await self.get_course(course_id)
        require_owner_or_admin(actor, course.teacher_id, "Not authorized to update this course")

        for field in ("title", "description", "level", "category"):
            value = getattr(request, field)
            if value is not None:
                setattr(course, field, value)

        if request.lessons is not None:
            course.lessons = self._build_lessons(request.lessons)
        if request.final_assessment is not None:
            course.assessment_questions = self._build_questions(request.final_assessment)
            course.passing_score = self._passing_score(request.final_assessment)

        await self._course_repository.commit()
        await self._course_repository.refresh(course)
        logger.info(f"Course {course_id} updated by {actor.id}")
        return course

    async def delete_course(self, actor: CurrentUser, course_id: UUID) -> None:
        require_role(actor, UserRole.TEACHER, UserRole.ADMIN)
        course = await self.get_course(course_id)
        require_owner_or_admin(actor, course.teacher_id, "Not authorized to delete this course")

        enrollments = await self._enrollment_repository.bulk_delete({"course_id": course_id}, commit=False)
        badges = await self._badge_repository.bulk_delete({"course_id": course_id}, commit=False)
        await self._course_repository.delete(course)
        logger.info(
            f"Course {course_id} deleted by {actor.id} "
            f"(removed {enrollments} enrollments, {badges} badges)"
        )

    def _passing_score(self, assessment: FinalAssessmentRequest) -> float:
        if assessment.passing_score is None:
            return self._settings.default_passing_score
        return assessment.passing_score

    @staticmethod
    def _build_lessons(lessons: List[LessonRequest]) -> List[CourseLesson]:
        return [
            CourseLesson(position=index, title=lesson.title, content=lesson.content, order=lesson.order)
            for index, lesson in enumerate(lessons)
        ]

    @staticmethod
    def _build_questions(assessment: FinalAssessmentRequest) -> List[AssessmentQuestion]:
        return [
            AssessmentQuestion(
                position=index,
                question=q.question,
                options=list(q.options),
                correct_answer=q.correct_answer,
            )
            for index, q in enumerate(assessment.questions)
        ]
