import logging
from typing import Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from eduplatform.dependencies.auth import get_current_user
from eduplatform.dependencies.services import get_diagnostic_service
from eduplatform.model.enums import Level
from eduplatform.schemas.diagnostic import (
    BucketScoreResponse,
    CreateDiagnosticQuizRequest,
    DiagnosticQuizResponse,
    DiagnosticResultResponse,
    DiagnosticSubmitResponse,
    LevelThresholdsSchema,
    SubmitDiagnosticRequest,
    UpdateDiagnosticQuizRequest,
)
from eduplatform.schemas.generic import ApiResponse, MessageResponse
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.diagnostic_service import DiagnosticService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagnostic", tags=["Diagnostic"])


# Static paths are declared before "/{quiz_id}" so they are matched first

@router.get(
    "/quizzes/all",
    response_model=ApiResponse[Dict[str, List[DiagnosticQuizResponse]]],
    summary="List Diagnostic Quizzes",
    description="All diagnostic quizzes grouped by category, without correct answers.",
)
async def list_quizzes(
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[Dict[str, List[DiagnosticQuizResponse]]]:
    grouped = await diagnostic_service.list_grouped_by_category()
    data = {
        category: [DiagnosticQuizResponse.from_model(quiz) for quiz in quizzes]
        for category, quizzes in grouped.items()
    }
    return ApiResponse[Dict[str, List[DiagnosticQuizResponse]]].success(data=data)


@router.get(
    "/my-quizzes",
    response_model=ApiResponse[List[DiagnosticQuizResponse]],
    summary="List My Diagnostic Quizzes",
    description="Quizzes authored by the calling teacher, including correct answers.",
)
async def list_my_quizzes(
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[List[DiagnosticQuizResponse]]:
    quizzes = await diagnostic_service.list_teacher_quizzes(current_user)
    return ApiResponse[List[DiagnosticQuizResponse]].success(
        data=[DiagnosticQuizResponse.from_model(quiz, include_answers=True) for quiz in quizzes]
    )


@router.get(
    "/my-results",
    response_model=ApiResponse[List[DiagnosticResultResponse]],
    summary="List My Diagnostic Results",
    description="Diagnostic results of the calling user, newest first.",
)
async def list_my_results(
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[List[DiagnosticResultResponse]]:
    results = await diagnostic_service.list_student_results(current_user)
    return ApiResponse[List[DiagnosticResultResponse]].success(
        data=[DiagnosticResultResponse.from_model(result) for result in results]
    )


@router.get(
    "/quiz/{quiz_id}",
    response_model=ApiResponse[DiagnosticQuizResponse],
    summary="Get Diagnostic Quiz",
    description="Get a quiz for taking. Correct answers are stripped.",
)
async def get_quiz(
        quiz_id: UUID,
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[DiagnosticQuizResponse]:
    quiz = await diagnostic_service.get_quiz(quiz_id)
    return ApiResponse[DiagnosticQuizResponse].success(data=DiagnosticQuizResponse.from_model(quiz))


@router.get(
    "/quiz/{quiz_id}/full",
    response_model=ApiResponse[DiagnosticQuizResponse],
    summary="Get Full Diagnostic Quiz",
    description="Get a quiz including correct answers. Quiz owner or admin only.",
)
async def get_full_quiz(
        quiz_id: UUID,
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[DiagnosticQuizResponse]:
    quiz = await diagnostic_service.get_full_quiz(current_user, quiz_id)
    return ApiResponse[DiagnosticQuizResponse].success(
        data=DiagnosticQuizResponse.from_model(quiz, include_answers=True)
    )


@router.get(
    "/quiz/{quiz_id}/results",
    response_model=ApiResponse[List[DiagnosticResultResponse]],
    summary="List Quiz Results",
    description="All results of one quiz, newest first. Quiz owner or admin only.",
)
async def list_quiz_results(
        quiz_id: UUID,
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[List[DiagnosticResultResponse]]:
    results = await diagnostic_service.list_quiz_results(current_user, quiz_id)
    return ApiResponse[List[DiagnosticResultResponse]].success(
        data=[DiagnosticResultResponse.from_model(result) for result in results]
    )


@router.post(
    "/quiz/{quiz_id}/submit",
    response_model=ApiResponse[DiagnosticSubmitResponse],
    summary="Submit Diagnostic Quiz",
    description="Grade a diagnostic attempt and record the determined level on the student.",
)
async def submit_quiz(
        quiz_id: UUID,
        request: SubmitDiagnosticRequest,
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[DiagnosticSubmitResponse]:
    """
    - **answers**: selected option index per question, aligned by position.
      Missing trailing answers and nulls count as wrong.

    Returns the level, the overall percentage, the per-difficulty scores and
    the thresholds that were applied.
    """
    logger.info(f"Received diagnostic submission for quiz {quiz_id} from {current_user.id}")
    submission = await diagnostic_service.submit(current_user, quiz_id, request.answers)

    thresholds = submission.determination.thresholds
    data = DiagnosticSubmitResponse(
        result_id=submission.result.id,
        level=submission.determination.level,
        overall_percentage=round(submission.score.overall_percentage, 1),
        scores={
            level: BucketScoreResponse.of(
                submission.score.bucket(level).correct, submission.score.bucket(level).total
            )
            for level in Level
        },
        thresholds=LevelThresholdsSchema(
            beginner=thresholds.beginner,
            intermediate=thresholds.intermediate,
            advanced=thresholds.advanced,
        ),
    )
    return ApiResponse[DiagnosticSubmitResponse].success(
        data=data, message=f"Your level is {data.level.value}"
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[DiagnosticQuizResponse],
    summary="Create Diagnostic Quiz",
    description="Create a diagnostic quiz. Thresholds default to 40/65/85 when omitted.",
)
async def create_quiz(
        request: CreateDiagnosticQuizRequest,
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[DiagnosticQuizResponse]:
    quiz = await diagnostic_service.create_quiz(current_user, request)
    return ApiResponse[DiagnosticQuizResponse].success(
        data=DiagnosticQuizResponse.from_model(quiz, include_answers=True),
        message="Diagnostic quiz created successfully",
    )


@router.put(
    "/{quiz_id}",
    response_model=ApiResponse[DiagnosticQuizResponse],
    summary="Update Diagnostic Quiz",
    description="Partially update a diagnostic quiz. Quiz owner or admin only.",
)
async def update_quiz(
        quiz_id: UUID,
        request: UpdateDiagnosticQuizRequest,
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[DiagnosticQuizResponse]:
    quiz = await diagnostic_service.update_quiz(current_user, quiz_id, request)
    return ApiResponse[DiagnosticQuizResponse].success(
        data=DiagnosticQuizResponse.from_model(quiz, include_answers=True),
        message="Diagnostic quiz updated successfully",
    )


@router.delete(
    "/{quiz_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete Diagnostic Quiz",
    description="Delete a diagnostic quiz and its results. Quiz owner or admin only.",
)
async def delete_quiz(
        quiz_id: UUID,
        diagnostic_service: DiagnosticService = Depends(get_diagnostic_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[MessageResponse]:
    await diagnostic_service.delete_quiz(current_user, quiz_id)
    return ApiResponse[MessageResponse].success(
        data=MessageResponse(message=f"Diagnostic quiz {quiz_id} deleted"),
        message="Diagnostic quiz deleted successfully",
    )
