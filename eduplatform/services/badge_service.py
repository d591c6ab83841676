import logging
from typing import Sequence
from uuid import UUID

from eduplatform.model.enrollment_models import Badge
from eduplatform.repositories.enrollment_repo import BadgeRepository
from eduplatform.schemas.user import CurrentUser
from eduplatform.utils.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class BadgeService:
    """Read access to course completion badges. Badges are issued by EnrollmentService."""

    def __init__(self, badge_repository: BadgeRepository):
        self._badge_repository = badge_repository

    async def list_user_badges(self, actor: CurrentUser) -> Sequence[Badge]:
        return await self._badge_repository.get_by_user(actor.id)

    async def get_badge(self, badge_id: UUID) -> Badge:
        badge = await self._badge_repository.get_by_id(badge_id)
        if not badge:
            raise ResourceNotFoundException(f"Badge not found with ID: {badge_id}")
        return badge
