from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt, model_validator

from eduplatform.model.diagnostic_models import DiagnosticQuiz, DiagnosticResult
from eduplatform.model.enums import Level
from eduplatform.schemas.course import TeacherSummary
from eduplatform.schemas.user import UserSummary


# =============================
#   Request Schemas
# =============================
class DiagnosticQuestionRequest(BaseModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    correct_answer: int = Field(..., ge=0, description="Index of the correct option")
    difficulty: Level = Field(..., description="Bucket this question is scored in")

    @model_validator(mode="after")
    def check_correct_answer(self):
        if self.correct_answer >= len(self.options):
            raise ValueError("correct_answer must index one of the options")
        return self


class LevelThresholdsSchema(BaseModel):
    """Percent cut points. Expected (not enforced) beginner <= intermediate <= advanced."""

    beginner: float = Field(..., ge=0, le=100)
    intermediate: float = Field(..., ge=0, le=100)
    advanced: float = Field(..., ge=0, le=100)


class CreateDiagnosticQuizRequest(BaseModel):
    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    questions: List[DiagnosticQuestionRequest] = Field(..., min_length=1)
    level_thresholds: Optional[LevelThresholdsSchema] = Field(
        None, description="Defaults to 40/65/85"
    )


class UpdateDiagnosticQuizRequest(BaseModel):
    """Partial update; questions are replaced wholesale"""

    title: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    questions: Optional[List[DiagnosticQuestionRequest]] = Field(None, min_length=1)
    level_thresholds: Optional[LevelThresholdsSchema] = None


class SubmitDiagnosticRequest(BaseModel):
    answers: List[Optional[StrictInt]] = Field(
        ..., description="Selected option index per question, aligned by position; null = unanswered"
    )


# =============================
#   Response Schemas
# =============================
class DiagnosticQuestionResponse(BaseModel):
    question: str
    options: List[str]
    difficulty: Level
    correct_answer: Optional[int] = Field(
        None, description="Only shown to the quiz teacher and admins"
    )


class DiagnosticQuizResponse(BaseModel):
    id: UUID
    title: str
    category: str
    description: Optional[str] = None
    teacher: Optional[TeacherSummary] = None
    questions: List[DiagnosticQuestionResponse]
    level_thresholds: LevelThresholdsSchema
    created_date: datetime

    @classmethod
    def from_model(cls, quiz: DiagnosticQuiz, include_answers: bool = False) -> "DiagnosticQuizResponse":
        return cls(
            id=quiz.id,
            title=quiz.title,
            category=quiz.category,
            description=quiz.description,
            teacher=TeacherSummary.model_validate(quiz.teacher) if quiz.teacher else None,
            questions=[
                DiagnosticQuestionResponse(
                    question=q.question,
                    options=list(q.options),
                    difficulty=q.difficulty,
                    correct_answer=q.correct_answer if include_answers else None,
                )
                for q in quiz.questions
            ],
            level_thresholds=LevelThresholdsSchema(
                beginner=quiz.beginner_threshold,
                intermediate=quiz.intermediate_threshold,
                advanced=quiz.advanced_threshold,
            ),
            created_date=quiz.created_date,
        )


class BucketScoreResponse(BaseModel):
    correct: int
    total: int
    percentage: float

    @classmethod
    def of(cls, correct: int, total: int) -> "BucketScoreResponse":
        percentage = correct / total * 100 if total else 0.0
        return cls(correct=correct, total=total, percentage=round(percentage, 1))


class DiagnosticSubmitResponse(BaseModel):
    result_id: UUID
    level: Level
    overall_percentage: float = Field(..., description="Rounded to one decimal")
    scores: Dict[Level, BucketScoreResponse]
    thresholds: LevelThresholdsSchema


class DiagnosticResultResponse(BaseModel):
    id: UUID
    quiz_id: UUID
    student: Optional[UserSummary] = None
    answers: List[Optional[int]]
    scores: Dict[Level, BucketScoreResponse]
    overall_percentage: float
    determined_level: Level
    completed_at: datetime

    @classmethod
    def from_model(cls, result: DiagnosticResult) -> "DiagnosticResultResponse":
        return cls(
            id=result.id,
            quiz_id=result.quiz_id,
            student=UserSummary.model_validate(result.student) if result.student else None,
            answers=list(result.answers),
            scores={level: BucketScoreResponse.of(*result.bucket(level)) for level in Level},
            overall_percentage=round(result.overall_percentage, 1),
            determined_level=result.determined_level,
            completed_at=result.completed_at,
        )
