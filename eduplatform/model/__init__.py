"""
Model package - Database models and enums
"""
from eduplatform.model.base import Base, BaseMixin, TimestampMixin
from eduplatform.model.enums import Level, UserRole, LevelingPolicyType
from eduplatform.model.user_models import User
from eduplatform.model.course_models import Course, CourseLesson, AssessmentQuestion
from eduplatform.model.diagnostic_models import DiagnosticQuiz, DiagnosticQuestion, DiagnosticResult
from eduplatform.model.enrollment_models import Enrollment, Badge

__all__ = [
    # Base classes
    'Base',
    'BaseMixin',
    'TimestampMixin',
    # Enums
    'Level',
    'UserRole',
    'LevelingPolicyType',
    # User
    'User',
    # Course models
    'Course',
    'CourseLesson',
    'AssessmentQuestion',
    # Diagnostic models
    'DiagnosticQuiz',
    'DiagnosticQuestion',
    'DiagnosticResult',
    # Enrollment models
    'Enrollment',
    'Badge',
]
