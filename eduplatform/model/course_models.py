"""
Course aggregate: the course, its ordered lessons and its final assessment.

Lessons and assessment questions have no identity of their own beyond
``position``, their 0-based index within the course. Enrollments refer to
lessons by that index.
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Float,
    Integer,
    ForeignKey,
    JSON,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship

from eduplatform.model.base import Base, BaseMixin
from eduplatform.model.enums import Level


class Course(Base, BaseMixin):
    __tablename__ = "courses"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    level = Column(SQLEnum(Level, name="course_level"), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    teacher_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    passing_score = Column(Float, default=70.0, nullable=False)

    # Relationships
    teacher = relationship("User", lazy="selectin")
    lessons = relationship(
        "CourseLesson",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseLesson.position",
        lazy="selectin",
    )
    assessment_questions = relationship(
        "AssessmentQuestion",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="AssessmentQuestion.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Course(id={self.id}, title={self.title})>"


class CourseLesson(Base, BaseMixin):
    __tablename__ = "course_lessons"

    course_id = Column(
        Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    course = relationship("Course", back_populates="lessons")

    def __repr__(self):
        return f"<CourseLesson(course_id={self.course_id}, position={self.position})>"


class AssessmentQuestion(Base, BaseMixin):
    __tablename__ = "assessment_questions"

    course_id = Column(
        Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    question = Column(Text, nullable=False)
    options = Column(JSON, nullable=False, default=list)
    correct_answer = Column(Integer, nullable=False)

    course = relationship("Course", back_populates="assessment_questions")

    def __repr__(self):
        return f"<AssessmentQuestion(course_id={self.course_id}, position={self.position})>"
