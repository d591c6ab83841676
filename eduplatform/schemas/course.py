from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from eduplatform.model.course_models import Course
from eduplatform.model.enums import Level


# =============================
#   Request Schemas
# =============================
class LessonRequest(BaseModel):
    """A lesson; its identity is its position in the list"""

    title: str = Field(..., min_length=1)
    content: str = Field(..., description="Lesson body (HTML or markdown)")
    order: int = Field(default=0, description="Display order hint")


class AssessmentQuestionRequest(BaseModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2, description="Answer options, usually 4")
    correct_answer: int = Field(..., ge=0, description="Index of the correct option")

    @model_validator(mode="after")
    def check_correct_answer(self):
        if self.correct_answer >= len(self.options):
            raise ValueError("correct_answer must index one of the options")
        return self


class FinalAssessmentRequest(BaseModel):
    questions: List[AssessmentQuestionRequest] = Field(default_factory=list)
    passing_score: Optional[float] = Field(
        None, ge=0, le=100, description="Minimum score in percent; defaults to the service setting"
    )


class CreateCourseRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(...)
    level: Level
    category: str = Field(..., min_length=1)
    lessons: List[LessonRequest] = Field(default_factory=list)
    final_assessment: Optional[FinalAssessmentRequest] = None


class UpdateCourseRequest(BaseModel):
    """Partial update; lessons and final assessment are replaced wholesale"""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    level: Optional[Level] = None
    category: Optional[str] = Field(None, min_length=1)
    lessons: Optional[List[LessonRequest]] = None
    final_assessment: Optional[FinalAssessmentRequest] = None


# =============================
#   Response Schemas
# =============================
class TeacherSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class LessonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    position: int = Field(..., description="Lesson identity: 0-based index in the course")
    title: str
    content: str
    order: int


class AssessmentQuestionResponse(BaseModel):
    question: str
    options: List[str]
    correct_answer: Optional[int] = Field(
        None, description="Only shown to the course teacher and admins"
    )


class FinalAssessmentResponse(BaseModel):
    questions: List[AssessmentQuestionResponse]
    passing_score: float


class CourseSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    level: Level
    category: str


class CourseResponse(BaseModel):
    id: UUID
    title: str
    description: str
    level: Level
    category: str
    teacher: Optional[TeacherSummary] = None
    lessons: List[LessonResponse]
    final_assessment: FinalAssessmentResponse
    created_date: datetime
    updated_date: datetime

    @classmethod
    def from_model(cls, course: Course, include_answers: bool = False) -> "CourseResponse":
        return cls(
            id=course.id,
            title=course.title,
            description=course.description,
            level=course.level,
            category=course.category,
            teacher=TeacherSummary.model_validate(course.teacher) if course.teacher else None,
            lessons=[LessonResponse.model_validate(lesson) for lesson in course.lessons],
            final_assessment=FinalAssessmentResponse(
                questions=[
                    AssessmentQuestionResponse(
                        question=q.question,
                        options=list(q.options),
                        correct_answer=q.correct_answer if include_answers else None,
                    )
                    for q in course.assessment_questions
                ],
                passing_score=course.passing_score,
            ),
            created_date=course.created_date,
            updated_date=course.updated_date,
        )
