from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from eduplatform.model.enums import Level, UserRole
from eduplatform.schemas.badge import BadgeResponse


class CurrentUser(BaseModel):
    """Identity resolved from the bearer token"""

    id: str = Field(..., description="Identity provider user id")
    role: UserRole = Field(default=UserRole.STUDENT, description="Platform role")
    email: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: UserRole
    level: Optional[Level] = Field(None, description="Placement level from the latest diagnostic")
    badges: List[BadgeResponse] = Field(default_factory=list)
