"""
User Repository - Data access layer for users
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from eduplatform.model.enums import Level, UserRole
from eduplatform.model.user_models import User
from eduplatform.repositories.base_repo import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User entity
    """

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def sync_from_claims(
        self,
        user_id: str,
        role: UserRole,
        email: Optional[str] = None,
        name: Optional[str] = None,
    ) -> User:
        """
        Create the local user row on first sight, or refresh the identity
        fields from the latest token. The placement level is never touched.

        Args:
            user_id: Identity provider user id
            role: Role claim
            email: Email claim
            name: Full name claim

        Returns:
            The persisted User
        """
        user = await self.get_by_id(user_id)
        if user is None:
            user = await self.create_unique(
                User(id=user_id, role=role, email=email, name=name)
            )
            if user is not None:
                return user
            # A concurrent first request inserted the row
            user = await self.get_by_id(user_id)

        changed = False
        for field, value in (("role", role), ("email", email), ("name", name)):
            if value is not None and getattr(user, field) != value:
                setattr(user, field, value)
                changed = True

        if changed:
            await self.commit()
        return user

    async def set_level(self, user: User, level: Level, commit: bool = True) -> User:
        """
        Store a newly determined placement level on the user.

        Args:
            user: User to update
            level: Level determined by a diagnostic submission
            commit: Commit immediately

        Returns:
            Updated user
        """
        user.level = level
        if commit:
            await self.commit()
        else:
            await self.session.flush()
        return user
