from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from eduplatform.dependencies.auth import get_current_user
from eduplatform.dependencies.services import get_badge_service
from eduplatform.schemas.badge import BadgeResponse
from eduplatform.schemas.generic import ApiResponse
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.badge_service import BadgeService

router = APIRouter(prefix="/badges", tags=["Badges"])


@router.get(
    "/my-badges",
    response_model=ApiResponse[List[BadgeResponse]],
    summary="List My Badges",
    description="Course completion badges of the calling user, most recent first.",
)
async def list_my_badges(
        badge_service: BadgeService = Depends(get_badge_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[List[BadgeResponse]]:
    badges = await badge_service.list_user_badges(current_user)
    return ApiResponse[List[BadgeResponse]].success(
        data=[BadgeResponse.model_validate(badge) for badge in badges]
    )


@router.get(
    "/{badge_id}",
    response_model=ApiResponse[BadgeResponse],
    summary="Get Badge",
)
async def get_badge(
        badge_id: UUID,
        badge_service: BadgeService = Depends(get_badge_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[BadgeResponse]:
    badge = await badge_service.get_badge(badge_id)
    return ApiResponse[BadgeResponse].success(data=BadgeResponse.model_validate(badge))
