import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from eduplatform.dependencies.auth import get_current_user
from eduplatform.dependencies.services import get_enrollment_service
from eduplatform.schemas.badge import BadgeResponse
from eduplatform.schemas.enrollment import (
    AssessmentResultResponse,
    EnrollmentResponse,
    EnrollRequest,
    ProgressUpdateRequest,
    SubmitAssessmentRequest,
)
from eduplatform.schemas.generic import ApiResponse
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.enrollment_service import EnrollmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/enrollments", tags=["Enrollments"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[EnrollmentResponse],
    summary="Enroll In Course",
    description="Enroll the calling student in a course. Enrolling twice returns 409 Conflict.",
)
async def enroll(
        request: EnrollRequest,
        enrollment_service: EnrollmentService = Depends(get_enrollment_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EnrollmentResponse]:
    enrollment = await enrollment_service.enroll(current_user, request.course_id)
    return ApiResponse[EnrollmentResponse].success(
        data=EnrollmentResponse.from_model(enrollment),
        message="Enrolled successfully",
    )


@router.get(
    "/my-courses",
    response_model=ApiResponse[List[EnrollmentResponse]],
    summary="List My Enrollments",
    description="Enrollments of the calling student with their courses.",
)
async def list_my_enrollments(
        enrollment_service: EnrollmentService = Depends(get_enrollment_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[List[EnrollmentResponse]]:
    enrollments = await enrollment_service.list_student_enrollments(current_user)
    return ApiResponse[List[EnrollmentResponse]].success(
        data=[EnrollmentResponse.from_model(enrollment) for enrollment in enrollments]
    )


@router.get(
    "/course/{course_id}",
    response_model=ApiResponse[List[EnrollmentResponse]],
    summary="List Course Enrollments",
    description="Enrollments of one course with their students. Course teacher or admin only.",
)
async def list_course_enrollments(
        course_id: UUID,
        enrollment_service: EnrollmentService = Depends(get_enrollment_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[List[EnrollmentResponse]]:
    enrollments = await enrollment_service.list_course_enrollments(current_user, course_id)
    return ApiResponse[List[EnrollmentResponse]].success(
        data=[EnrollmentResponse.from_model(enrollment) for enrollment in enrollments]
    )


@router.get(
    "/{enrollment_id}",
    response_model=ApiResponse[EnrollmentResponse],
    summary="Get Enrollment",
    description="Get one enrollment. Visible to its student, the course teacher and admins.",
)
async def get_enrollment(
        enrollment_id: UUID,
        enrollment_service: EnrollmentService = Depends(get_enrollment_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EnrollmentResponse]:
    enrollment = await enrollment_service.get_visible_enrollment(current_user, enrollment_id)
    return ApiResponse[EnrollmentResponse].success(data=EnrollmentResponse.from_model(enrollment))


@router.put(
    "/{enrollment_id}/progress",
    response_model=ApiResponse[EnrollmentResponse],
    summary="Mark Lesson Complete",
    description="Record a completed lesson. Completing the same lesson again changes nothing.",
)
async def update_progress(
        enrollment_id: UUID,
        request: ProgressUpdateRequest,
        enrollment_service: EnrollmentService = Depends(get_enrollment_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EnrollmentResponse]:
    """
    - **lesson_id** (or **lessonId**): 0-based position of the lesson in the course
    """
    enrollment = await enrollment_service.mark_lesson_complete(
        current_user, enrollment_id, request.lesson_id
    )
    return ApiResponse[EnrollmentResponse].success(
        data=EnrollmentResponse.from_model(enrollment),
        message="Progress updated",
    )


@router.post(
    "/{enrollment_id}/assessment",
    response_model=ApiResponse[AssessmentResultResponse],
    summary="Submit Final Assessment",
    description="Grade the course final assessment. A passing score completes the course and issues a badge.",
)
async def submit_assessment(
        enrollment_id: UUID,
        request: SubmitAssessmentRequest,
        enrollment_service: EnrollmentService = Depends(get_enrollment_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[AssessmentResultResponse]:
    logger.info(f"Received final assessment for enrollment {enrollment_id} from {current_user.id}")
    submission = await enrollment_service.submit_assessment(current_user, enrollment_id, request.answers)

    outcome = submission.outcome
    data = AssessmentResultResponse(
        score=outcome.score,
        passed=outcome.passed,
        correct=outcome.correct,
        total=outcome.total,
        enrollment=EnrollmentResponse.from_model(submission.enrollment),
        badge=BadgeResponse.model_validate(submission.badge) if submission.badge else None,
    )
    message = "Assessment passed" if outcome.passed else "Assessment not passed"
    return ApiResponse[AssessmentResultResponse].success(data=data, message=message)
