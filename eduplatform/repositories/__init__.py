"""
Repository package - Data access layer
"""

from eduplatform.repositories.base_repo import BaseRepository
from eduplatform.repositories.user_repo import UserRepository
from eduplatform.repositories.course_repo import CourseRepository
from eduplatform.repositories.diagnostic_repo import DiagnosticQuizRepository, DiagnosticResultRepository
from eduplatform.repositories.enrollment_repo import EnrollmentRepository, BadgeRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CourseRepository",
    "DiagnosticQuizRepository",
    "DiagnosticResultRepository",
    "EnrollmentRepository",
    "BadgeRepository",
]
