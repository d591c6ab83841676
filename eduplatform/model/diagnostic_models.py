"""
Diagnostic (placement) quizzes and their immutable results
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
    DateTime,
    Index,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship

from eduplatform.model.base import Base, BaseMixin, utcnow
from eduplatform.model.enums import Level


class DiagnosticQuiz(Base, BaseMixin):
    __tablename__ = "diagnostic_quizzes"

    title = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    teacher_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Level thresholds, in percent. Expected beginner <= intermediate <= advanced.
    beginner_threshold = Column(Float, nullable=False, default=40.0)
    intermediate_threshold = Column(Float, nullable=False, default=65.0)
    advanced_threshold = Column(Float, nullable=False, default=85.0)

    # Relationships
    teacher = relationship("User", lazy="selectin")
    questions = relationship(
        "DiagnosticQuestion",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="DiagnosticQuestion.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<DiagnosticQuiz(id={self.id}, category={self.category})>"


class DiagnosticQuestion(Base, BaseMixin):
    __tablename__ = "diagnostic_questions"

    quiz_id = Column(
        Uuid, ForeignKey("diagnostic_quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    question = Column(Text, nullable=False)
    options = Column(JSON, nullable=False, default=list)
    correct_answer = Column(Integer, nullable=False)
    difficulty = Column(SQLEnum(Level, name="question_difficulty"), nullable=False)

    quiz = relationship("DiagnosticQuiz", back_populates="questions")

    def __repr__(self):
        return f"<DiagnosticQuestion(quiz_id={self.quiz_id}, position={self.position})>"


class DiagnosticResult(Base, BaseMixin):
    """One graded submission. Never updated after insert."""

    __tablename__ = "diagnostic_results"

    student_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    quiz_id = Column(
        Uuid, ForeignKey("diagnostic_quizzes.id", ondelete="CASCADE"), nullable=False
    )
    answers = Column(JSON, nullable=False, default=list)

    beginner_correct = Column(Integer, nullable=False, default=0)
    beginner_total = Column(Integer, nullable=False, default=0)
    intermediate_correct = Column(Integer, nullable=False, default=0)
    intermediate_total = Column(Integer, nullable=False, default=0)
    advanced_correct = Column(Integer, nullable=False, default=0)
    advanced_total = Column(Integer, nullable=False, default=0)

    overall_percentage = Column(Float, nullable=False)
    determined_level = Column(SQLEnum(Level, name="determined_level"), nullable=False)
    completed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    student = relationship("User", lazy="selectin")

    __table_args__ = (
        Index("ix_diagnostic_results_quiz_completed", "quiz_id", "completed_at"),
        Index("ix_diagnostic_results_student_completed", "student_id", "completed_at"),
    )

    def bucket(self, level: Level) -> tuple[int, int]:
        """(correct, total) for one difficulty bucket"""
        prefix = level.value
        return getattr(self, f"{prefix}_correct"), getattr(self, f"{prefix}_total")

    def __repr__(self):
        return f"<DiagnosticResult(id={self.id}, level={self.determined_level})>"
