"""
Enrollment (student <-> course) and the badges earned by passing a course
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Float,
    Integer,
    Boolean,
    ForeignKey,
    JSON,
    Uuid,
    DateTime,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from eduplatform.model.base import Base, BaseMixin, utcnow


class Enrollment(Base, BaseMixin):
    __tablename__ = "enrollments"

    student_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id = Column(
        Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Progress: completed lesson positions (set semantics) and the next lesson
    completed_lessons = Column(JSON, nullable=False, default=list)
    current_lesson = Column(Integer, nullable=False, default=0)

    final_assessment_score = Column(Float, nullable=True)
    final_assessment_answers = Column(JSON, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    enrolled_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    course = relationship("Course", lazy="selectin")
    student = relationship("User", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),
    )

    def __repr__(self):
        return f"<Enrollment(id={self.id}, student_id={self.student_id}, course_id={self.course_id})>"


class Badge(Base, BaseMixin):
    __tablename__ = "badges"

    user_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id = Column(
        Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    issued_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    course = relationship("Course", lazy="selectin")
    user = relationship("User", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_badge_user_course"),
    )

    def __repr__(self):
        return f"<Badge(id={self.id}, title={self.title})>"
