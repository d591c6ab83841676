"""
Scoring engine for diagnostic quizzes and final assessments.

Pure functions: a question list plus a submitted answer list in, tallies out.
Answers are option indices aligned with the questions by position. Missing
entries (short answer lists), ``None`` and out-of-range values simply never
match; grading never raises on a malformed answer list.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from eduplatform.model.enums import Level


class GradedQuestion(Protocol):
    correct_answer: int


class DifficultyQuestion(GradedQuestion, Protocol):
    difficulty: Level | str


@dataclass(frozen=True)
class BucketTally:
    correct: int = 0
    total: int = 0

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correct / self.total * 100


@dataclass(frozen=True)
class DiagnosticScore:
    buckets: dict[Level, BucketTally] = field(default_factory=dict)
    total_correct: int = 0
    total_questions: int = 0

    @property
    def overall_percentage(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return self.total_correct / self.total_questions * 100

    def bucket(self, level: Level) -> BucketTally:
        return self.buckets.get(level, BucketTally())


@dataclass(frozen=True)
class AssessmentGrade:
    correct: int
    total: int

    @property
    def score(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correct / self.total * 100


def is_correct(answers: Sequence[Optional[int]], index: int, correct_answer: int) -> bool:
    """Whether the answer at ``index`` selects ``correct_answer``."""
    if index >= len(answers):
        return False
    answer = answers[index]
    if answer is None or isinstance(answer, bool):
        return False
    return answer == correct_answer


def score_diagnostic(
    questions: Sequence[DifficultyQuestion],
    answers: Sequence[Optional[int]],
) -> DiagnosticScore:
    """
    Grade a diagnostic quiz by difficulty bucket.

    All three buckets are always present in the result; a difficulty with no
    questions has total 0.
    """
    correct = {level: 0 for level in Level}
    total = {level: 0 for level in Level}

    for index, question in enumerate(questions):
        difficulty = Level(question.difficulty)
        total[difficulty] += 1
        if is_correct(answers, index, question.correct_answer):
            correct[difficulty] += 1

    buckets = {level: BucketTally(correct[level], total[level]) for level in Level}
    return DiagnosticScore(
        buckets=buckets,
        total_correct=sum(correct.values()),
        total_questions=len(questions),
    )


def grade_assessment(
    questions: Sequence[GradedQuestion],
    answers: Sequence[Optional[int]],
) -> AssessmentGrade:
    """Flat grading (no difficulty buckets) used by course final assessments."""
    correct = sum(
        1 for index, question in enumerate(questions)
        if is_correct(answers, index, question.correct_answer)
    )
    return AssessmentGrade(correct=correct, total=len(questions))
