import logging
from typing import Sequence

from eduplatform.model.enrollment_models import Badge
from eduplatform.model.user_models import User
from eduplatform.repositories.enrollment_repo import BadgeRepository
from eduplatform.repositories.user_repo import UserRepository
from eduplatform.schemas.user import CurrentUser
from eduplatform.services.leveling import LevelDetermination
from eduplatform.utils.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class UserService:
    """Local user records: identity sync, profile and placement level."""

    def __init__(self, user_repository: UserRepository, badge_repository: BadgeRepository):
        self._user_repository = user_repository
        self._badge_repository = badge_repository

    async def sync_current_user(self, current: CurrentUser) -> User:
        return await self._user_repository.sync_from_claims(
            user_id=current.id,
            role=current.role,
            email=current.email,
            name=current.name,
        )

    async def get_profile(self, current: CurrentUser) -> tuple[User, Sequence[Badge]]:
        user = await self._user_repository.get_by_id(current.id)
        if not user:
            raise ResourceNotFoundException(f"User not found with ID: {current.id}")
        badges = await self._badge_repository.get_by_user(current.id)
        return user, badges

    async def record_level_determination(
        self,
        user_id: str,
        determination: LevelDetermination,
        commit: bool = True,
    ) -> User:
        """
        Store the level a diagnostic submission determined for a student.

        Args:
            user_id: Student user id
            determination: Outcome of the leveling policy
            commit: Commit immediately; False lets the caller save the
                diagnostic result in the same transaction

        Returns:
            Updated user
        """
        user = await self._user_repository.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundException(f"User not found with ID: {user_id}")

        previous = user.level
        await self._user_repository.set_level(user, determination.level, commit=commit)
        logger.info(
            f"Level for user {user_id}: {previous.value if previous else None} -> "
            f"{determination.level.value} ({determination.overall_percentage:.1f}%)"
        )
        return user
