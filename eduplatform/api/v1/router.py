from fastapi import APIRouter

from eduplatform.api.v1.endpoints import (
    badge_controller,
    course_controller,
    diagnostic_controller,
    enrollment_controller,
    user_controller,
)

api_router = APIRouter()

api_router.include_router(course_controller.router)
api_router.include_router(diagnostic_controller.router)
api_router.include_router(enrollment_controller.router)
api_router.include_router(badge_controller.router)
api_router.include_router(user_controller.router)
