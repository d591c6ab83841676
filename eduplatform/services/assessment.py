"""
Final assessment outcome and badge wording.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from eduplatform.services.scoring import GradedQuestion, grade_assessment


@dataclass(frozen=True)
class AssessmentOutcome:
    score: float
    correct: int
    total: int
    passed: bool


@dataclass(frozen=True)
class BadgeText:
    title: str
    description: str


def evaluate_assessment(
    questions: Sequence[GradedQuestion],
    answers: Sequence[Optional[int]],
    passing_score: float,
) -> AssessmentOutcome:
    grade = grade_assessment(questions, answers)
    return AssessmentOutcome(
        score=grade.score,
        correct=grade.correct,
        total=grade.total,
        passed=grade.score >= passing_score,
    )


def round_score(score: float) -> int:
    """Round half up, e.g. 62.5 -> 63."""
    return int(Decimal(str(score)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def completion_badge_text(course_title: str, score: float) -> BadgeText:
    return BadgeText(
        title=f"{course_title} Completion",
        description=f"Completed {course_title} with {round_score(score)}% score",
    )
