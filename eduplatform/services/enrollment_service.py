"""
Enrollment Service - enrollment, lesson progress, final assessment and badge issuance.

Rules:
    - One enrollment per (student, course); the database constraint decides.
    - Lesson completion is idempotent and only the enrolled student may
      record it.
    - Assessment score and answers are stored on every submission. A passing
      score completes the enrollment and issues the course badge once; a later
      failing score never revokes either.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from uuid import UUID

from eduplatform.model.base import utcnow
from eduplatform.model.enrollment_models import Enrollment, Badge
from eduplatform.model.enums import UserRole
from eduplatform.repositories.course_repo import CourseRepository
from eduplatform.repositories.enrollment_repo import EnrollmentRepository, BadgeRepository
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.access_policy import require_role, require_owner_or_admin
from eduplatform.services.assessment import AssessmentOutcome, evaluate_assessment, completion_badge_text
from eduplatform.services.progress import LessonProgress
from eduplatform.utils.exceptions import (
    AccessDeniedException,
    BadRequestException,
    ConflictException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)


@dataclass
class AssessmentSubmission:
    outcome: AssessmentOutcome
    enrollment: Enrollment
    badge: Optional[Badge] = None


class EnrollmentService:
    def __init__(
            self,
            enrollment_repository: EnrollmentRepository,
            course_repository: CourseRepository,
            badge_repository: BadgeRepository,
    ):
        self._enrollment_repository = enrollment_repository
        self._course_repository = course_repository
        self._badge_repository = badge_repository

    # ==================== ENROLLMENT ====================

    async def enroll(self, actor: CurrentUser, course_id: UUID) -> Enrollment:
        """
        Enroll the acting student in a course.

        Raises:
            AccessDeniedException: actor is not a student
            ResourceNotFoundException: course does not exist
            ConflictException: the student is already enrolled
        """
        require_role(actor, UserRole.STUDENT)

        course = await self._course_repository.get_by_id(course_id)
        if not course:
            raise ResourceNotFoundException(f"Course not found with ID: {course_id}")

        enrollment = await self._enrollment_repository.create_unique(
            Enrollment(
                student_id=actor.id,
                course_id=course_id,
                completed_lessons=[],
                current_lesson=0,
                completed=False,
            )
        )
        if enrollment is None:
            # The insert may also fail because the course vanished after the lookup
            if await self._enrollment_repository.get_for_student_course(actor.id, course_id):
                raise ConflictException("Already enrolled in this course")
            raise ResourceNotFoundException(f"Course not found with ID: {course_id}")

        logger.info(f"Student {actor.id} enrolled in course {course_id} (enrollment {enrollment.id})")
        return enrollment

    async def get_enrollment(self, enrollment_id: UUID) -> Enrollment:
        enrollment = await self._enrollment_repository.get_by_id(enrollment_id)
        if not enrollment:
            raise ResourceNotFoundException(f"Enrollment not found with ID: {enrollment_id}")
        return enrollment

    async def get_visible_enrollment(self, actor: CurrentUser, enrollment_id: UUID) -> Enrollment:
        """An enrollment is visible to its student, the course teacher and admins."""
        enrollment = await self.get_enrollment(enrollment_id)
        if enrollment.student_id == actor.id:
            return enrollment
        if enrollment.course is not None and enrollment.course.teacher_id == actor.id:
            return enrollment
        if actor.is_admin:
            return enrollment
        raise AccessDeniedException("Access denied")

    async def list_student_enrollments(self, actor: CurrentUser) -> Sequence[Enrollment]:
        return await self._enrollment_repository.get_by_student(actor.id)

    async def list_course_enrollments(self, actor: CurrentUser, course_id: UUID) -> Sequence[Enrollment]:
        course = await self._course_repository.get_by_id(course_id)
        if not course:
            raise ResourceNotFoundException(f"Course not found with ID: {course_id}")
        require_owner_or_admin(actor, course.teacher_id)
        return await self._enrollment_repository.get_by_course(course_id)

    # ==================== PROGRESS ====================

    async def mark_lesson_complete(
            self, actor: CurrentUser, enrollment_id: UUID, lesson_index: int
    ) -> Enrollment:
        """
        Record a completed lesson and advance the current-lesson pointer.

        Raises:
            ResourceNotFoundException: enrollment does not exist
            AccessDeniedException: actor is not the enrolled student
            BadRequestException: lesson index outside the course
        """
        enrollment = await self._get_owned_enrollment(actor, enrollment_id)

        lesson_count = len(enrollment.course.lessons)
        if not 0 <= lesson_index < lesson_count:
            raise BadRequestException(
                f"Lesson {lesson_index} does not exist; course has {lesson_count} lessons"
            )

        progress = LessonProgress.from_stored(enrollment.completed_lessons, enrollment.current_lesson)
        updated = progress.complete(lesson_index)
        if updated is progress:
            logger.debug(f"Lesson {lesson_index} already completed in enrollment {enrollment_id}")
            return enrollment

        # Assign new list objects so the JSON column is flagged dirty
        enrollment.completed_lessons = list(updated.completed_lessons)
        enrollment.current_lesson = updated.current_lesson
        await self._enrollment_repository.commit()

        logger.info(
            f"Enrollment {enrollment_id}: lesson {lesson_index} completed, "
            f"{len(updated.completed_lessons)}/{lesson_count} done"
        )
        return enrollment

    # ==================== FINAL ASSESSMENT ====================

    async def submit_assessment(
            self, actor: CurrentUser, enrollment_id: UUID, answers: List[Optional[int]]
    ) -> AssessmentSubmission:
        """
        Grade the course final assessment for the enrolled student.

        Raises:
            ResourceNotFoundException: enrollment does not exist
            AccessDeniedException: actor is not the enrolled student
        """
        enrollment = await self._get_owned_enrollment(actor, enrollment_id)
        course = enrollment.course

        outcome = evaluate_assessment(course.assessment_questions, answers, course.passing_score)

        enrollment.final_assessment_score = outcome.score
        enrollment.final_assessment_answers = list(answers)
        if outcome.passed:
            enrollment.completed = True
            if enrollment.completed_at is None:
                enrollment.completed_at = utcnow()
        await self._enrollment_repository.commit()
        await self._enrollment_repository.refresh(enrollment)

        logger.info(
            f"Enrollment {enrollment_id}: assessment scored {outcome.score:.1f}% "
            f"({outcome.correct}/{outcome.total}), passing {course.passing_score}%, passed={outcome.passed}"
        )

        badge = None
        if outcome.passed:
            badge = await self._issue_badge(enrollment, outcome.score)
        return AssessmentSubmission(outcome=outcome, enrollment=enrollment, badge=badge)

    async def _issue_badge(self, enrollment: Enrollment, score: float) -> Badge:
        """Issue the course badge unless the student already holds it."""
        existing = await self._badge_repository.get_for_user_course(
            enrollment.student_id, enrollment.course_id
        )
        if existing:
            logger.info(f"Badge {existing.id} already issued for enrollment {enrollment.id}")
            return existing

        text = completion_badge_text(enrollment.course.title, score)
        badge = await self._badge_repository.create_unique(
            Badge(
                user_id=enrollment.student_id,
                course_id=enrollment.course_id,
                title=text.title,
                description=text.description,
            )
        )
        if badge is None:
            # A concurrent submission won the unique constraint
            await self._enrollment_repository.refresh(enrollment)
            badge = await self._badge_repository.get_for_user_course(
                enrollment.student_id, enrollment.course_id
            )
        else:
            logger.info(f"Badge {badge.id} issued to {enrollment.student_id} for course {enrollment.course_id}")
        return badge

    async def _get_owned_enrollment(self, actor: CurrentUser, enrollment_id: UUID) -> Enrollment:
        enrollment = await self.get_enrollment(enrollment_id)
        if enrollment.student_id != actor.id:
            raise AccessDeniedException("Access denied")
        return enrollment
