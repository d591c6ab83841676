from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, StrictInt

from eduplatform.model.enrollment_models import Enrollment
from eduplatform.schemas.badge import BadgeResponse
from eduplatform.schemas.course import CourseSummary
from eduplatform.schemas.user import UserSummary


# =============================
#   Request Schemas
# =============================
class EnrollRequest(BaseModel):
    course_id: UUID = Field(..., validation_alias=AliasChoices("course_id", "courseId"))


class ProgressUpdateRequest(BaseModel):
    lesson_id: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("lesson_id", "lessonId"),
        description="Position of the completed lesson in the course",
    )


class SubmitAssessmentRequest(BaseModel):
    answers: List[Optional[StrictInt]] = Field(
        ..., description="Selected option index per question, aligned by position"
    )


# =============================
#   Response Schemas
# =============================
class ProgressResponse(BaseModel):
    completed_lessons: List[int]
    current_lesson: int


class EnrollmentResponse(BaseModel):
    id: UUID
    student_id: str
    course_id: UUID
    progress: ProgressResponse
    final_assessment_score: Optional[float] = None
    final_assessment_answers: Optional[List[Optional[int]]] = None
    completed: bool
    enrolled_at: datetime
    completed_at: Optional[datetime] = None
    course: Optional[CourseSummary] = None
    student: Optional[UserSummary] = None

    @classmethod
    def from_model(cls, enrollment: Enrollment) -> "EnrollmentResponse":
        return cls(
            id=enrollment.id,
            student_id=enrollment.student_id,
            course_id=enrollment.course_id,
            progress=ProgressResponse(
                completed_lessons=list(enrollment.completed_lessons or []),
                current_lesson=enrollment.current_lesson,
            ),
            final_assessment_score=enrollment.final_assessment_score,
            final_assessment_answers=enrollment.final_assessment_answers,
            completed=enrollment.completed,
            enrolled_at=enrollment.enrolled_at,
            completed_at=enrollment.completed_at,
            course=CourseSummary.model_validate(enrollment.course) if enrollment.course else None,
            student=UserSummary.model_validate(enrollment.student) if enrollment.student else None,
        )


class AssessmentResultResponse(BaseModel):
    score: float
    passed: bool
    correct: int
    total: int
    enrollment: EnrollmentResponse
    badge: Optional[BadgeResponse] = Field(
        None, description="The course badge when the assessment was passed"
    )
