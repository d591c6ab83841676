from fastapi import Depends

from eduplatform.dependencies.services import get_user_service
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.auth_service import AuthService
from eduplatform.services.user_service import UserService


async def get_current_user(
        current: CurrentUser = Depends(AuthService.get_current_user),
        user_service: UserService = Depends(get_user_service),
) -> CurrentUser:
    """
    Resolve the caller from the bearer token and make sure a local user row
    exists for it, so ownership and badge foreign keys always resolve.
    """
    await user_service.sync_current_user(current)
    return current
