"""
Role and ownership checks shared by the services.
"""

from eduplatform.model.enums import UserRole
from eduplatform.schemas.user import CurrentUser
from eduplatform.utils.exceptions import AccessDeniedException


def require_role(actor: CurrentUser, *roles: UserRole) -> None:
    if actor.role not in roles:
        allowed = ", ".join(role.value for role in roles)
        raise AccessDeniedException(f"This action requires one of the roles: {allowed}")


def is_owner_or_admin(actor: CurrentUser, owner_id: str) -> bool:
    return actor.id == owner_id or actor.is_admin


def require_owner_or_admin(actor: CurrentUser, owner_id: str, message: str = "Access denied") -> None:
    if not is_owner_or_admin(actor, owner_id):
        raise AccessDeniedException(message)
