"""
User model. Identities are issued by the external identity provider; this
table mirrors the token claims and holds the placement level.
"""

from sqlalchemy import Column, String, Enum as SQLEnum

from eduplatform.model.base import Base, TimestampMixin
from eduplatform.model.enums import Level, UserRole


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    role = Column(
        SQLEnum(UserRole, name="user_role"),
        default=UserRole.STUDENT,
        nullable=False,
    )
    level = Column(SQLEnum(Level, name="user_level"), nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, role={self.role})>"
