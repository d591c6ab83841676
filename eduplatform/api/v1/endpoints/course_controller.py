import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from eduplatform.dependencies.auth import get_current_user
from eduplatform.dependencies.services import get_course_service
from eduplatform.model.enums import Level
from eduplatform.schemas.course import CourseResponse, CreateCourseRequest, UpdateCourseRequest
from eduplatform.schemas.generic import ApiResponse, MessageResponse
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.course_service import CourseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get(
    "",
    response_model=ApiResponse[List[CourseResponse]],
    summary="List Courses",
    description="List courses, optionally filtered by level and category. Correct answers are never included.",
)
async def list_courses(
        level: Optional[Level] = Query(None),
        category: Optional[str] = Query(None),
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=500),
        course_service: CourseService = Depends(get_course_service),
) -> ApiResponse[List[CourseResponse]]:
    courses = await course_service.list_courses(level=level, category=category, skip=skip, limit=limit)
    return ApiResponse[List[CourseResponse]].success(
        data=[CourseResponse.from_model(course) for course in courses],
        message=f"Found {len(courses)} courses",
    )


@router.get(
    "/{course_id}",
    response_model=ApiResponse[CourseResponse],
    summary="Get Course",
    description="Get a course with its lessons and final assessment.",
)
async def get_course(
        course_id: UUID,
        course_service: CourseService = Depends(get_course_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    """
    Correct answers of the final assessment are only returned to the course
    teacher and admins.
    """
    course = await course_service.get_course(course_id)
    include_answers = course_service.can_view_answers(current_user, course)
    return ApiResponse[CourseResponse].success(
        data=CourseResponse.from_model(course, include_answers=include_answers)
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CourseResponse],
    summary="Create Course",
    description="Create a course with lessons and a final assessment. Teachers and admins only.",
)
async def create_course(
        request: CreateCourseRequest,
        course_service: CourseService = Depends(get_course_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    logger.info(f"Received course creation request from {current_user.id}: {request.title}")
    course = await course_service.create_course(current_user, request)
    return ApiResponse[CourseResponse].success(
        data=CourseResponse.from_model(course, include_answers=True),
        message="Course created successfully",
    )


@router.put(
    "/{course_id}",
    response_model=ApiResponse[CourseResponse],
    summary="Update Course",
    description="Partially update a course. Lessons and final assessment, when given, replace the old ones.",
)
async def update_course(
        course_id: UUID,
        request: UpdateCourseRequest,
        course_service: CourseService = Depends(get_course_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    course = await course_service.update_course(current_user, course_id, request)
    return ApiResponse[CourseResponse].success(
        data=CourseResponse.from_model(course, include_answers=True),
        message="Course updated successfully",
    )


@router.delete(
    "/{course_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete Course",
    description="Delete a course together with its enrollments and badges.",
)
async def delete_course(
        course_id: UUID,
        course_service: CourseService = Depends(get_course_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[MessageResponse]:
    await course_service.delete_course(current_user, course_id)
    return ApiResponse[MessageResponse].success(
        data=MessageResponse(message=f"Course {course_id} deleted"),
        message="Course deleted successfully",
    )
