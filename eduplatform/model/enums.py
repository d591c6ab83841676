"""
Enums shared by models and schemas
"""
from enum import Enum


class UserRole(str, Enum):
    """Platform role carried by the identity token"""
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class Level(str, Enum):
    """Ordinal proficiency level, used for courses, questions and placement"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]


_LEVEL_RANKS = {
    Level.BEGINNER: 0,
    Level.INTERMEDIATE: 1,
    Level.ADVANCED: 2,
}


class LevelingPolicyType(str, Enum):
    """Which leveling strategy turns diagnostic scores into a level"""
    OVERALL = "overall"
    BUCKET = "bucket"
