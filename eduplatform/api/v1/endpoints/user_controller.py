from fastapi import APIRouter, Depends

from eduplatform.dependencies.auth import get_current_user
from eduplatform.dependencies.services import get_user_service
from eduplatform.schemas.badge import BadgeResponse
from eduplatform.schemas.generic import ApiResponse
from eduplatform.schemas.user import CurrentUser, UserProfileResponse
from eduplatform.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/me",
    response_model=ApiResponse[UserProfileResponse],
    summary="Get Current User",
    description="Profile of the calling user with placement level and badges.",
)
async def get_me(
        user_service: UserService = Depends(get_user_service),
        current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[UserProfileResponse]:
    user, badges = await user_service.get_profile(current_user)
    profile = UserProfileResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        level=user.level,
        badges=[BadgeResponse.model_validate(badge) for badge in badges],
    )
    return ApiResponse[UserProfileResponse].success(data=profile)
