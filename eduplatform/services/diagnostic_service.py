"""
Diagnostic Service - placement quizzes.

Pipeline for a submission:
    score_diagnostic -> LevelingPolicy.determine -> save DiagnosticResult
    -> record_level_determination on the student, in one transaction.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence
from uuid import UUID

from eduplatform.model.diagnostic_models import DiagnosticQuiz, DiagnosticQuestion, DiagnosticResult
from eduplatform.model.enums import Level, UserRole
from eduplatform.repositories.diagnostic_repo import DiagnosticQuizRepository, DiagnosticResultRepository
from eduplatform.schemas.diagnostic import (
    CreateDiagnosticQuizRequest,
    UpdateDiagnosticQuizRequest,
    DiagnosticQuestionRequest,
    LevelThresholdsSchema,
)
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.access_policy import require_role, require_owner_or_admin, is_owner_or_admin
from eduplatform.services.leveling import LevelingPolicy, LevelThresholds, LevelDetermination
from eduplatform.services.scoring import DiagnosticScore, score_diagnostic
from eduplatform.services.user_service import UserService
from eduplatform.utils.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


@dataclass
class DiagnosticSubmission:
    """Everything produced by grading one diagnostic attempt"""

    result: DiagnosticResult
    score: DiagnosticScore
    determination: LevelDetermination


class DiagnosticService:
    def __init__(
            self,
            quiz_repository: DiagnosticQuizRepository,
            result_repository: DiagnosticResultRepository,
            user_service: UserService,
            leveling_policy: LevelingPolicy,
            default_thresholds: LevelThresholds,
    ):
        self._quiz_repository = quiz_repository
        self._result_repository = result_repository
        self._user_service = user_service
        self._leveling_policy = leveling_policy
        self._default_thresholds = default_thresholds

    # ==================== QUERIES ====================

    async def get_quiz(self, quiz_id: UUID) -> DiagnosticQuiz:
        quiz = await self._quiz_repository.get_by_id(quiz_id)
        if not quiz:
            raise ResourceNotFoundException(f"Diagnostic quiz not found with ID: {quiz_id}")
        return quiz

    async def list_grouped_by_category(self) -> dict[str, List[DiagnosticQuiz]]:
        grouped: dict[str, List[DiagnosticQuiz]] = {}
        for quiz in await self._quiz_repository.get_all_by_category():
            grouped.setdefault(quiz.category, []).append(quiz)
        return grouped

    async def get_full_quiz(self, actor: CurrentUser, quiz_id: UUID) -> DiagnosticQuiz:
        quiz = await self.get_quiz(quiz_id)
        require_owner_or_admin(actor, quiz.teacher_id)
        return quiz

    async def list_teacher_quizzes(self, actor: CurrentUser) -> Sequence[DiagnosticQuiz]:
        require_role(actor, UserRole.TEACHER, UserRole.ADMIN)
        return await self._quiz_repository.get_by_teacher(actor.id)

    async def list_quiz_results(self, actor: CurrentUser, quiz_id: UUID) -> Sequence[DiagnosticResult]:
        quiz = await self.get_quiz(quiz_id)
        require_owner_or_admin(actor, quiz.teacher_id)
        return await self._result_repository.get_by_quiz(quiz_id)

    async def list_student_results(self, actor: CurrentUser) -> Sequence[DiagnosticResult]:
        return await self._result_repository.get_by_student(actor.id)

    @staticmethod
    def can_view_answers(actor: CurrentUser, quiz: DiagnosticQuiz) -> bool:
        return is_owner_or_admin(actor, quiz.teacher_id)

    # ==================== AUTHORING ====================

    async def create_quiz(self, actor: CurrentUser, request: CreateDiagnosticQuizRequest) -> DiagnosticQuiz:
        require_role(actor, UserRole.TEACHER, UserRole.ADMIN)

        thresholds = request.level_thresholds or LevelThresholdsSchema(
            beginner=self._default_thresholds.beginner,
            intermediate=self._default_thresholds.intermediate,
            advanced=self._default_thresholds.advanced,
        )
        quiz = DiagnosticQuiz(
            title=request.title,
            category=request.category,
            description=request.description,
            teacher_id=actor.id,
            questions=self._build_questions(request.questions),
        )
        self._apply_thresholds(quiz, thresholds)

        quiz = await self._quiz_repository.create(quiz)
        logger.info(f"Diagnostic quiz {quiz.id} created by {actor.id} with {len(quiz.questions)} questions")
        return quiz

    async def update_quiz(
            self, actor: CurrentUser, quiz_id: UUID, request: UpdateDiagnosticQuizRequest
    ) -> DiagnosticQuiz:
        quiz = await self.get_quiz(quiz_id)
        require_owner_or_admin(actor, quiz.teacher_id, "Not authorized to update this quiz")

        for field in ("title", "category"):
            value = getattr(request, field)
            if value:
                setattr(quiz, field, value)
        if request.description is not None:
            quiz.description = request.description
        if request.questions is not None:
            quiz.questions = self._build_questions(request.questions)
        if request.level_thresholds is not None:
            self._apply_thresholds(quiz, request.level_thresholds)

        await self._quiz_repository.commit()
        await self._quiz_repository.refresh(quiz)
        logger.info(f"Diagnostic quiz {quiz_id} updated by {actor.id}")
        return quiz

    async def delete_quiz(self, actor: CurrentUser, quiz_id: UUID) -> None:
        quiz = await self.get_quiz(quiz_id)
        require_owner_or_admin(actor, quiz.teacher_id, "Not authorized to delete this quiz")

        removed = await self._result_repository.bulk_delete({"quiz_id": quiz_id}, commit=False)
        await self._quiz_repository.delete(quiz)
        logger.info(f"Diagnostic quiz {quiz_id} deleted by {actor.id} (removed {removed} results)")

    # ==================== SUBMISSION ====================

    async def submit(self, actor: CurrentUser, quiz_id: UUID, answers: List[int | None]) -> DiagnosticSubmission:
        """
        Grade a diagnostic attempt, store the immutable result and record the
        determined level on the student.

        Raises:
            AccessDeniedException: actor is not a student
            ResourceNotFoundException: quiz does not exist
        """
        require_role(actor, UserRole.STUDENT)
        quiz = await self.get_quiz(quiz_id)

        score = score_diagnostic(quiz.questions, answers)
        determination = self._leveling_policy.determine(score, self.thresholds_of(quiz))

        result = DiagnosticResult(
            student_id=actor.id,
            quiz_id=quiz.id,
            answers=list(answers),
            overall_percentage=score.overall_percentage,
            determined_level=determination.level,
        )
        for level in Level:
            bucket = score.bucket(level)
            setattr(result, f"{level.value}_correct", bucket.correct)
            setattr(result, f"{level.value}_total", bucket.total)

        result = await self._result_repository.create(result, commit=False)
        await self._user_service.record_level_determination(actor.id, determination, commit=False)
        await self._result_repository.commit()
        await self._result_repository.refresh(result)

        logger.info(
            f"Diagnostic {quiz_id} submitted by {actor.id}: "
            f"{score.total_correct}/{score.total_questions} -> {determination.level.value}"
        )
        return DiagnosticSubmission(result=result, score=score, determination=determination)

    @staticmethod
    def thresholds_of(quiz: DiagnosticQuiz) -> LevelThresholds:
        return LevelThresholds(
            beginner=quiz.beginner_threshold,
            intermediate=quiz.intermediate_threshold,
            advanced=quiz.advanced_threshold,
        )

    @staticmethod
    def _apply_thresholds(quiz: DiagnosticQuiz, thresholds: LevelThresholdsSchema) -> None:
        quiz.beginner_threshold = thresholds.beginner
        quiz.intermediate_threshold = thresholds.intermediate
        quiz.advanced_threshold = thresholds.advanced

    @staticmethod
    def _build_questions(questions: List[DiagnosticQuestionRequest]) -> List[DiagnosticQuestion]:
        return [
            DiagnosticQuestion(
                position=index,
                question=q.question,
                options=list(q.options),
                correct_answer=q.correct_answer,
                difficulty=q.difficulty,
            )
            for index, q in enumerate(questions)
        ]
