import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eduplatform.config import Settings, get_settings
from eduplatform.dependencies.db import get_database
from eduplatform.factory.LevelingFactory import LevelingFactory
from eduplatform.repositories import (
    BadgeRepository,
    CourseRepository,
    DiagnosticQuizRepository,
    DiagnosticResultRepository,
    EnrollmentRepository,
    UserRepository,
)
from eduplatform.services.badge_service import BadgeService
from eduplatform.services.course_service import CourseService
from eduplatform.services.diagnostic_service import DiagnosticService
from eduplatform.services.enrollment_service import EnrollmentService
from eduplatform.services.leveling import LevelingPolicy
from eduplatform.services.user_service import UserService

logger = logging.getLogger(__name__)


# =============================
#   Repository Dependencies
# =============================
async def get_user_repository(
        session: AsyncSession = Depends(get_database),
) -> UserRepository:
    return UserRepository(session)


async def get_course_repository(
        session: AsyncSession = Depends(get_database),
) -> CourseRepository:
    return CourseRepository(session)


async def get_diagnostic_quiz_repository(
        session: AsyncSession = Depends(get_database),
) -> DiagnosticQuizRepository:
    return DiagnosticQuizRepository(session)


async def get_diagnostic_result_repository(
        session: AsyncSession = Depends(get_database),
) -> DiagnosticResultRepository:
    return DiagnosticResultRepository(session)


async def get_enrollment_repository(
        session: AsyncSession = Depends(get_database),
) -> EnrollmentRepository:
    return EnrollmentRepository(session)


async def get_badge_repository(
        session: AsyncSession = Depends(get_database),
) -> BadgeRepository:
    return BadgeRepository(session)


# =============================
#   Leveling Policy
# =============================
def get_leveling_policy() -> LevelingPolicy:
    """
    Get the leveling policy selected by ``LEVELING_POLICY``.
    """
    return LevelingFactory.create()


# =============================
#   Services (Per-Request)
# =============================
async def get_user_service(
        user_repository: UserRepository = Depends(get_user_repository),
        badge_repository: BadgeRepository = Depends(get_badge_repository),
) -> UserService:
    return UserService(user_repository, badge_repository)


async def get_course_service(
        settings: Settings = Depends(get_settings),
        course_repository: CourseRepository = Depends(get_course_repository),
        enrollment_repository: EnrollmentRepository = Depends(get_enrollment_repository),
        badge_repository: BadgeRepository = Depends(get_badge_repository),
) -> CourseService:
    """
    Get CourseService instance with injected repositories.
    """
    return CourseService(settings, course_repository, enrollment_repository, badge_repository)


async def get_diagnostic_service(
        quiz_repository: DiagnosticQuizRepository = Depends(get_diagnostic_quiz_repository),
        result_repository: DiagnosticResultRepository = Depends(get_diagnostic_result_repository),
        user_service: UserService = Depends(get_user_service),
        leveling_policy: LevelingPolicy = Depends(get_leveling_policy),
) -> DiagnosticService:
    """
    Get DiagnosticService instance.

    Quizzes created without custom cut points get the configured default
    thresholds.
    """
    return DiagnosticService(
        quiz_repository=quiz_repository,
        result_repository=result_repository,
        user_service=user_service,
        leveling_policy=leveling_policy,
        default_thresholds=LevelingFactory.default_thresholds(),
    )


async def get_enrollment_service(
        enrollment_repository: EnrollmentRepository = Depends(get_enrollment_repository),
        course_repository: CourseRepository = Depends(get_course_repository),
        badge_repository: BadgeRepository = Depends(get_badge_repository),
) -> EnrollmentService:
    return EnrollmentService(enrollment_repository, course_repository, badge_repository)


async def get_badge_service(
        badge_repository: BadgeRepository = Depends(get_badge_repository),
) -> BadgeService:
    return BadgeService(badge_repository)
