from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from eduplatform.schemas.course import CourseSummary


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    course_id: UUID
    title: str
    description: str
    issued_at: datetime
    course: Optional[CourseSummary] = None
